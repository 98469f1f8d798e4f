"""PyQt6 front end: main window, panels and background sessions."""
