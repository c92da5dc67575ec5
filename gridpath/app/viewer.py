# gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Grid Pathfinding Viewer — draw walls, pick an algorithm, watch it search.

- Keyboard:
    [B]/[D]/[A]  -> select algorithm (BFS / DFS / A*)
    [SPACE]      -> run/pause
    [N]          -> single frame
    [R]          -> reset visited/path marks
    [C]          -> clear grid
    [G]          -> generate maze
    [1]..[9]     -> load preset map
    [+]/[-]      -> replay speed
    [Q]/[ESC]    -> quit
- Mouse:
    left drag    -> paint walls
    right click  -> toggle wall
    S + click    -> place start
    E + click    -> place end

Config: see gridpath/app/settings.py (GRIDPATH_* env vars or --key=value).
"""

import logging
import random
import sys
import time
from typing import Dict, List, Optional, Tuple

import pygame

from gridpath.app.settings import Settings, resolve_settings
from gridpath.core.errors import GridError
from gridpath.core.maps import list_maps, load_map, resolve_map
from gridpath.core.maze import generate_maze
from gridpath.core.search import Algorithm, search
from gridpath.core.sequencer import Frame, Sequencer
from gridpath.core.types import Cell, CellKind, Grid

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 20
FONT_NAME = None  # default pygame font
SPEED_STEPS = (0.25, 0.5, 1.0, 2.0, 4.0, 8.0)

# Colors
BLACK       = (  0,  0,  0)
GRID_LINE   = ( 40, 44, 52)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
BACKDROP    = (24, 26, 32)

CELL_COLORS: Dict[CellKind, Tuple[int, int, int]] = {
    CellKind.FREE:    (200, 200, 200),
    CellKind.WALL:    ( 36,  40,  48),
    CellKind.START:   ( 70, 130, 180),
    CellKind.END:     (220,  50,  47),
    CellKind.VISITED: (255, 120, 180),
    CellKind.PATH:    (  0, 255, 200),
}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)
        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)
        text = font.render(self.label, True, (235, 238, 242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, settings: Optional[Settings] = None):
        pygame.init()

        self.settings = settings or Settings(rows=grid.rows, cols=grid.cols)
        self.grid = grid
        self.rng = random.Random(self.settings.seed)
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size(grid)
        win_w = GRID_MARGIN*2 + grid.cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.rows * self.cell_size, 600)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grid Pathfinding")

        self._buttons: List[UIButton] = []
        self._presets = list_maps()
        self._layout(win_w, win_h)

        self.selected_algo = self.settings.algo
        self.speed = self.settings.speed
        self.sequencer: Optional[Sequencer] = None
        self.running = False
        self.state = "Idle"
        self.painting = False
        self.clock = pygame.time.Clock()
        self._next_frame_t = 0.0
        self._refresh_active_states()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Integer cell size that fits the window, grid plate on the left."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(4, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))
        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_right = GRID_MARGIN * 2 + self.grid.cols * self.cell_size
        self._right_band = pygame.Rect(grid_right, 0, max(PANEL_W, win_w - grid_right), win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(6, min(CELL_SIZE_DEFAULT, target_h // grid.rows))

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        if pos[0] < ox or pos[1] < oy or not self.grid.in_bounds((row, col)):
            return None
        return (row, col)

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick()
            self._draw()
            self.clock.tick(60)

    def _tick(self, now: Optional[float] = None):
        """Apply every frame whose advised time has come."""
        now = time.time() if now is None else now
        if self._next_frame_t == 0.0:
            self._next_frame_t = now
        while self.running and self._next_frame_t <= now:
            frame = self._advance()
            if frame is None:
                break
            self._next_frame_t += frame.delay_ms / 1000.0 / self.speed

    def _advance(self) -> Optional[Frame]:
        """Apply one frame, starting a search first if none is loaded."""
        if self.sequencer is None and not self._start_search():
            return None
        frame = self.sequencer.step()
        if frame is not None:
            self.grid.mark(frame.cell, frame.kind)
        status = self.sequencer.status
        if status == "done":
            self.state = "Done"
            self.running = False
        elif status == "no_path":
            self.state = "No path found"
            self.running = False
        self._refresh_active_states()
        return frame

    def _start_search(self) -> bool:
        self.grid.reset_transient()
        try:
            result = search(self.grid, algorithm=self.selected_algo)
        except GridError as ex:
            logger.warning("search not started: %s", ex)
            self.state = str(ex)
            self.running = False
            return False
        logger.info("%s: %s, %d visited, path_len=%s", result.algorithm,
                    "found" if result.found else "no path", len(result.visited), result.steps)
        self.sequencer = Sequencer(result)
        self.state = "Running"
        return True

    def _replaying(self) -> bool:
        return self.sequencer is not None and self.sequencer.status == "running"

    # ---------- controls ----------
    def _toggle_run(self):
        if self.state in ("Done", "No path found"):
            self._reset()
        self.running = not self.running
        self._next_frame_t = 0.0
        if self.running and self.sequencer is None and not self._start_search():
            return
        if self.sequencer is not None:
            self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _single_step(self):
        self.running = False
        self._advance()
        if self._replaying():
            self.state = "Paused"

    def _drop_sequencer(self):
        if self.sequencer is not None:
            self.sequencer.cancel()
        self.sequencer = None
        self.running = False

    def _reset(self):
        self._drop_sequencer()
        self.grid.reset_transient()
        self.state = "Idle"
        self._refresh_active_states()

    def _clear(self):
        self._drop_sequencer()
        self.grid.clear()
        self.state = "Idle"
        self._refresh_active_states()

    def _set_grid(self, grid: Grid, label: str):
        self._drop_sequencer()
        self.grid = grid
        self.state = label
        self._layout(*self.screen.get_size())
        self._refresh_active_states()

    def _generate(self):
        try:
            grid = generate_maze(self.grid.rows, self.grid.cols, rng=self.rng)
        except GridError as ex:
            logger.warning("maze generation failed: %s", ex)
            self.state = str(ex)
            return
        self._set_grid(grid, "Maze generated")

    def _load_preset(self, index: int):
        names = list(self._presets)
        if index >= len(names):
            return
        try:
            grid = load_map(self._presets[names[index]])
        except GridError as ex:
            logger.warning("failed to load map %s: %s", names[index], ex)
            self.state = "Map load failed"
            return
        self._set_grid(grid, f"Map {names[index]}")

    def _switch_algo(self, algo: Algorithm):
        self.selected_algo = algo
        self._reset()

    def _bump_speed(self, dv: int):
        idx = min(range(len(SPEED_STEPS)), key=lambda i: abs(SPEED_STEPS[i] - self.speed))
        self.speed = SPEED_STEPS[max(0, min(len(SPEED_STEPS) - 1, idx + dv))]

    def _edit(self, cell: Optional[Cell], action: str):
        """Grid edits from the mouse; ignored while a replay is in flight."""
        if cell is None or self._replaying():
            return
        if self.sequencer is not None:
            # finished replay: marks stay until the next run resets them
            self.sequencer = None
            self.state = "Idle"
        try:
            if action == "start":
                self.grid.set_start(cell)
            elif action == "end":
                self.grid.set_end(cell)
            elif action == "toggle":
                self.grid.toggle_wall(cell)
            else:
                self.grid.paint_wall(cell)
        except GridError as ex:
            # endpoint collisions are last-write-wins no-ops
            logger.debug("edit %s at %s ignored: %s", action, cell, ex)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type == pygame.MOUSEBUTTONDOWN:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                self._handle_click(e.pos, e.button)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self.painting = False
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                if self.painting:
                    self._edit(self.cell_at(e.pos), "wall")

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self._single_step()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_c:
            self._clear()
        elif key == pygame.K_g:
            self._generate()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif key == pygame.K_b:
            self._switch_algo(Algorithm.BFS)
        elif key == pygame.K_d:
            self._switch_algo(Algorithm.DFS)
        elif key == pygame.K_a:
            self._switch_algo(Algorithm.ASTAR)
        elif pygame.K_1 <= key <= pygame.K_9:
            self._load_preset(key - pygame.K_1)

    def _handle_click(self, pos: Tuple[int, int], button: int):
        cell = self.cell_at(pos)
        if button == 3:
            self._edit(cell, "toggle")
            return
        if button != 1:
            return
        pressed = pygame.key.get_pressed()
        if pressed[pygame.K_s]:
            self._edit(cell, "start")
        elif pressed[pygame.K_e]:
            self._edit(cell, "end")
        else:
            self.painting = True
            self._edit(cell, "wall")

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(BACKDROP)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                pygame.draw.rect(self.screen, CELL_COLORS[self.grid.cells[row][col]], rect)
                if cs >= 8:
                    pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._single_step); y += h + gap
        add("Reset", self._reset);           y += h + gap
        add("Clear", self._clear);           y += h + gap
        add("Generate Maze", self._generate); y += h + gap
        add("Algo: BFS", lambda: self._switch_algo(Algorithm.BFS), togglable=True, store_as="btn_algo_bfs"); y += h + gap
        add("Algo: DFS", lambda: self._switch_algo(Algorithm.DFS), togglable=True, store_as="btn_algo_dfs"); y += h + gap
        add("Algo: A*", lambda: self._switch_algo(Algorithm.ASTAR), togglable=True, store_as="btn_algo_astar")
        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        algo = getattr(self, "selected_algo", None)
        for attr, member in (("btn_algo_bfs", Algorithm.BFS), ("btn_algo_dfs", Algorithm.DFS),
                             ("btn_algo_astar", Algorithm.ASTAR)):
            if hasattr(self, attr):
                getattr(self, attr).set_active(algo is member)

    def metrics(self) -> dict:
        seq = self.sequencer
        if seq is None:
            return {"algo": self.selected_algo.label, "visited": 0, "path_len": 0, "frames_left": 0}
        return {
            "algo": seq.result.algorithm,
            "visited": len(seq.result.visited),
            "path_len": seq.result.steps or 0,
            "frames_left": seq.remaining,
        }

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 210), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0, 0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self.metrics()
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Algo: {m['algo']}")
        line(f"Visited: {m['visited']}")
        line(f"Path Len: {m['path_len']}")
        line(f"Speed: x{self.speed:g}")
        line(f"Status: {self.state}")
        line("S/E + click: start/end", color=(160, 165, 175))

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def initial_grid(settings: Settings) -> Grid:
    if settings.map:
        return resolve_map(settings.map)
    return Grid.create(settings.rows, settings.cols)


def main(argv: Optional[List[str]] = None):
    try:
        settings = resolve_settings(argv)
    except ValueError as ex:
        logging.basicConfig(level=logging.INFO)
        logger.error("bad configuration: %s", ex)
        sys.exit(2)
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        grid = initial_grid(settings)
    except GridError as ex:
        logger.error("failed to load initial grid: %s", ex)
        sys.exit(1)
    Viewer(grid, settings).run()


if __name__ == "__main__":
    main()
