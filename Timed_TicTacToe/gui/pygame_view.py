"""Pygame front end: size picker, board, score bar, countdown and controls."""

try:
    from MatchSession import MatchSession, ROUND_ENDED
    from engine.states import CellState, GameState
    from utils.logger import log_event
except ImportError:
    from Timed_TicTacToe.MatchSession import MatchSession, ROUND_ENDED
    from Timed_TicTacToe.engine.states import CellState, GameState
    from Timed_TicTacToe.utils.logger import log_event


THEMES = {
    "light": {
        "background": (245, 245, 250),
        "panel": (225, 228, 240),
        "cell": (255, 255, 255),
        "grid": (60, 70, 120),
        "text": (20, 20, 30),
        "button": (90, 100, 200),
        "button_text": (255, 255, 255),
        "warning": (200, 0, 0),
    },
    "dark": {
        "background": (28, 28, 34),
        "panel": (45, 45, 58),
        "cell": (70, 70, 84),
        "grid": (160, 170, 230),
        "text": (230, 230, 230),
        "button": (120, 130, 220),
        "button_text": (20, 20, 30),
        "warning": (255, 90, 90),
    },
}

PANEL_TOP = 100
PANEL_BOTTOM = 120
MARGIN = 16
BUTTON_HEIGHT = 44


# --- pure layout and text helpers (no pygame needed) ---

def board_rect(window_size):
    """(x, y, side) of the square board area between the two panels."""
    side = window_size - PANEL_TOP - PANEL_BOTTOM
    side = min(side, window_size - 2 * MARGIN)
    x = (window_size - side) // 2
    return x, PANEL_TOP, side


def cell_at(pos, window_size, board_size):
    """Cell index under a mouse position, or None outside the board."""
    bx, by, side = board_rect(window_size)
    mx, my = pos
    if not (bx <= mx < bx + side and by <= my < by + side):
        return None
    tile = side / board_size
    col = min(int((mx - bx) // tile), board_size - 1)
    row = min(int((my - by) // tile), board_size - 1)
    return row * board_size + col


def game_buttons(window_size):
    """Label -> (x, y, w, h) for the two rows of game-screen buttons."""
    width = (window_size - 3 * MARGIN) // 2
    top = window_size - PANEL_BOTTOM + 10
    second = top + BUTTON_HEIGHT + 8
    left, right = MARGIN, 2 * MARGIN + width
    return {
        "Reset": (left, top, width, BUTTON_HEIGHT),
        "New Game": (right, top, width, BUTTON_HEIGHT),
        "Theme": (left, second, width, BUTTON_HEIGHT),
        "Back": (right, second, width, BUTTON_HEIGHT),
    }


def picker_buttons(window_size, sizes):
    """Label -> rect for the size picker: one button per size, then the theme toggle."""
    width = window_size // 3
    x = (window_size - width) // 2
    top = window_size // 4
    buttons = {}
    for i, size in enumerate(sizes):
        buttons[f"{size}x{size}"] = (x, top + i * (BUTTON_HEIGHT + 12), width, BUTTON_HEIGHT)
    theme_y = top + len(sizes) * (BUTTON_HEIGHT + 12) + 2 * BUTTON_HEIGHT
    buttons["Theme"] = (x, theme_y, width, BUTTON_HEIGHT)
    return buttons


def hit(buttons, pos):
    mx, my = pos
    for label, (x, y, w, h) in buttons.items():
        if x <= mx < x + w and y <= my < y + h:
            return label
    return None


def score_text(session):
    return f"X: {session.cross_wins}    O: {session.nought_wins}"


def turn_text(session):
    return f"Turn: {session.current_player.symbol}"


def timer_text(session):
    return f"Time: {session.remaining_time} s"


def banner_text(game_state):
    if game_state is GameState.CROSS_WIN:
        return "Winner: X"
    if game_state is GameState.NOUGHT_WIN:
        return "Winner: O"
    if game_state is GameState.DRAW:
        return "Draw"
    return ""


class PygameView:
    def __init__(self, settings, window_size=None, logger=log_event):
        import pygame

        self._pygame = pygame
        self.settings = settings
        self.window_size = window_size or settings["window_size"]
        self.theme = settings["theme"]
        self.logger = logger
        self.session = None
        self.in_game = False
        self._dirty = True

        pygame.init()
        self.screen = pygame.display.set_mode((self.window_size, self.window_size))
        pygame.display.set_caption("Timed Tic-Tac-Toe")
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 34)

    @property
    def colors(self):
        return THEMES[self.theme]

    def toggle_theme(self):
        self.theme = "dark" if self.theme == "light" else "light"
        self._dirty = True

    def open_board(self, board_size):
        """Enter the game screen, reusing the session across size changes."""
        if self.session is None:
            self.session = MatchSession(
                board_size=board_size,
                turn_seconds=self.settings["turn_seconds"],
                tick_seconds=self.settings["tick_seconds"],
                logger=self.logger,
            )
            self.session.subscribe(self._on_session_event)
        else:
            self.session.change_board_size(board_size)
        self.in_game = True
        self._dirty = True

    def _on_session_event(self, event, session):
        self._dirty = True
        if event == ROUND_ENDED:
            self.logger(banner_text(session.game_state))

    def handle_click(self, pos):
        if not self.in_game:
            label = hit(picker_buttons(self.window_size, self.settings["board_sizes"]), pos)
            if label == "Theme":
                self.toggle_theme()
            elif label is not None:
                self.open_board(int(label.split("x")[0]))
            return

        session = self.session
        index = cell_at(pos, self.window_size, session.size)
        if index is not None:
            session.apply_move(index)
            return
        label = hit(game_buttons(self.window_size), pos)
        if label == "Reset":
            session.new_round()
        elif label == "New Game":
            session.new_match()
        elif label == "Theme":
            self.toggle_theme()
        elif label == "Back":
            session.close()
            self.in_game = False
            self._dirty = True

    # --- drawing ---

    def _draw_text(self, text, font, color, center_pos):
        text_surface = font.render(text, True, color)
        text_rect = text_surface.get_rect(center=center_pos)
        self.screen.blit(text_surface, text_rect)

    def _draw_buttons(self, buttons):
        pygame = self._pygame
        for label, rect in buttons.items():
            pygame.draw.rect(self.screen, self.colors["button"], pygame.Rect(*rect), border_radius=8)
            x, y, w, h = rect
            self._draw_text(label, self.font_medium, self.colors["button_text"], (x + w / 2, y + h / 2))

    def _draw_picker(self):
        half = self.window_size / 2
        self._draw_text("Choose board size", self.font_large, self.colors["text"], (half, self.window_size / 8))
        self._draw_buttons(picker_buttons(self.window_size, self.settings["board_sizes"]))

    def _draw_board(self):
        pygame = self._pygame
        session = self.session
        bx, by, side = board_rect(self.window_size)
        tile = side / session.size
        for index, cell in enumerate(session.cells):
            row, col = divmod(index, session.size)
            rect = pygame.Rect(bx + col * tile + 2, by + row * tile + 2, tile - 4, tile - 4)
            pygame.draw.rect(self.screen, self.colors["cell"], rect, border_radius=6)
            pygame.draw.rect(self.screen, self.colors["grid"], rect, width=2, border_radius=6)
            if cell is not CellState.EMPTY:
                self._draw_text(cell.symbol, self.font_large, self.colors["text"], rect.center)

    def _draw_panel(self):
        pygame = self._pygame
        session = self.session
        half = self.window_size / 2
        pygame.draw.rect(self.screen, self.colors["panel"], pygame.Rect(0, 0, self.window_size, PANEL_TOP - 8))
        if session.game_state.is_terminal:
            self._draw_text(score_text(session), self.font_medium, self.colors["text"], (half, 24))
            self._draw_text(banner_text(session.game_state), self.font_large, self.colors["grid"], (half, 64))
            return
        self._draw_text(score_text(session), self.font_medium, self.colors["text"], (half, 20))
        self._draw_text(turn_text(session), self.font_medium, self.colors["text"], (half, 48))
        warn = session.remaining_time <= self.settings["warning_seconds"]
        color = self.colors["warning"] if warn else self.colors["text"]
        self._draw_text(timer_text(session), self.font_medium, color, (half, 76))

    def render(self):
        self.screen.fill(self.colors["background"])
        if self.in_game:
            self._draw_panel()
            self._draw_board()
            self._draw_buttons(game_buttons(self.window_size))
        else:
            self._draw_picker()
        self._pygame.display.flip()
        self._dirty = False

    def run(self):
        pygame = self._pygame
        clock = pygame.time.Clock()
        try:
            while True:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        return
                    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        self.handle_click(event.pos)
                if self.in_game:
                    self.session.poll()
                if self._dirty:
                    self.render()
                clock.tick(30)
        finally:
            self.close()

    def close(self):
        if self.session is not None:
            self.session.close()
        self._pygame.quit()
