"""Side and bottom panels of the main window."""
