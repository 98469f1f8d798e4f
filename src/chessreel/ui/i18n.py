"""Internationalisation strings for the chessreel UI.

Usage::

    from chessreel.ui.i18n import t, set_language

    set_language("Russian")
    print(t().btn_search)          # "Найти партии"
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Main window ──────────────────────────────────────────────────────
    window_title: str
    status_ready: str
    status_searching: str  # "Fetching games of {user}..."
    status_found: str  # "{count} games found"
    status_search_failed: str  # "Search failed: {msg}"
    status_player_not_found: str  # "Player {user} not found"
    status_bad_pgn: str  # "Could not read this game: {msg}"
    status_analysis_started: str
    status_analysis_done: str
    status_analysis_cancelled: str

    # ── SearchPanel ──────────────────────────────────────────────────────
    search_username: str
    search_from: str
    search_to: str
    search_opening: str
    search_opening_hint: str
    search_result: str
    btn_search: str
    result_all: str
    result_win: str
    result_loss: str
    result_draw: str
    result_checkmated: str
    result_resigned: str
    result_timeout: str
    result_abandoned: str

    # ── GameList ─────────────────────────────────────────────────────────
    games_header: str
    games_empty: str
    btn_new_search: str

    # ── ControlPanel ─────────────────────────────────────────────────────
    tip_start: str
    tip_prev: str
    tip_play: str
    tip_pause: str
    tip_next: str
    tip_end: str
    tip_mute: str
    tip_unmute: str
    btn_analyze: str

    # ── MovePanel / AnalysisPanel ────────────────────────────────────────
    moves_header: str
    analysis_header: str
    analysis_placeholder: str
    select_game_hint: str


_EN = Strings(
    window_title="Chessreel — Chess.com game archive",
    status_ready="Ready",
    status_searching="Fetching games of {user}...",
    status_found="{count} games found",
    status_search_failed="Search failed: {msg}",
    status_player_not_found="Player {user} not found",
    status_bad_pgn="Could not read this game: {msg}",
    status_analysis_started="Analyzing game...",
    status_analysis_done="Analysis complete",
    status_analysis_cancelled="Analysis cancelled",
    search_username="Username:",
    search_from="From:",
    search_to="To:",
    search_opening="Opening:",
    search_opening_hint="e.g. Sicilian",
    search_result="Result:",
    btn_search="Find games",
    result_all="All results",
    result_win="Wins",
    result_loss="Losses",
    result_draw="Draws",
    result_checkmated="Lost by checkmate",
    result_resigned="Lost by resignation",
    result_timeout="Lost on time",
    result_abandoned="Lost by abandonment",
    games_header="Games",
    games_empty="No games match the search.",
    btn_new_search="New search",
    tip_start="Start (Up)",
    tip_prev="Previous (Left / Scroll up)",
    tip_play="Play (Space)",
    tip_pause="Pause (Space)",
    tip_next="Next (Right / Scroll down)",
    tip_end="End (Down)",
    tip_mute="Mute",
    tip_unmute="Unmute",
    btn_analyze="Analyze",
    moves_header="Moves",
    analysis_header="Analysis",
    analysis_placeholder="Press Analyze to review this game.",
    select_game_hint="Choose a game from the list to review the board.",
)

_RU = Strings(
    window_title="Chessreel — архив партий Chess.com",
    status_ready="Готово",
    status_searching="Загрузка партий {user}...",
    status_found="Найдено партий: {count}",
    status_search_failed="Ошибка поиска: {msg}",
    status_player_not_found="Игрок {user} не найден",
    status_bad_pgn="Не удалось прочитать партию: {msg}",
    status_analysis_started="Анализ партии...",
    status_analysis_done="Анализ завершён",
    status_analysis_cancelled="Анализ отменён",
    search_username="Игрок:",
    search_from="С:",
    search_to="По:",
    search_opening="Дебют:",
    search_opening_hint="например, Sicilian",
    search_result="Результат:",
    btn_search="Найти партии",
    result_all="Все результаты",
    result_win="Победы",
    result_loss="Поражения",
    result_draw="Ничьи",
    result_checkmated="Поражение матом",
    result_resigned="Поражение — сдался",
    result_timeout="Поражение по времени",
    result_abandoned="Поражение — покинул игру",
    games_header="Партии",
    games_empty="Нет партий по запросу.",
    btn_new_search="Новый поиск",
    tip_start="В начало (Вверх)",
    tip_prev="Назад (Влево / колесо вверх)",
    tip_play="Воспроизвести (Пробел)",
    tip_pause="Пауза (Пробел)",
    tip_next="Вперёд (Вправо / колесо вниз)",
    tip_end="В конец (Вниз)",
    tip_mute="Выключить звук",
    tip_unmute="Включить звук",
    btn_analyze="Анализ",
    moves_header="Ходы",
    analysis_header="Анализ",
    analysis_placeholder="Нажмите «Анализ», чтобы разобрать партию.",
    select_game_hint="Выберите партию из списка, чтобы открыть доску.",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Russian": _RU,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active locale strings."""
    return _current


def set_language(language: str) -> None:
    """Switch the global locale. Unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
