# controlled_astar/app/viewer.py
#!/usr/bin/env python3
"""
A* Viewer — Minimal Controls + Metrics

- Keyboard:
    [1]/[2]/[3]  -> switch map
    [H]          -> cycle heuristic (manhattan / chebyshev / octile / euclidean)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Config:
- ENV: ASTAR_HEURISTIC=<name>
- CLI: --heuristic=<name>  --speed=<steps per second>  --map=<1|2|3>
"""

import logging
import os
import sys
import time
from pathlib import Path
from typing import List, Tuple, Optional, Dict

import pygame

from controlled_astar.core.astar import AStar, AStarSearch
from controlled_astar.core.cost import HEURISTICS
from controlled_astar.core.errors import AStarError, ConfigError
from controlled_astar.core.maps import load_map
from controlled_astar.core.node import NodeGraph
from controlled_astar.core.types import Cell, GridMap

_logger = logging.getLogger(__name__)

# ---------- Config ----------
MAP_DIR = Path(__file__).resolve().parents[2] / "maps"
MAP_FILES = {
    "01_open_field":   MAP_DIR / "01_open_field.json",
    "02_custom_edges": MAP_DIR / "02_custom_edges.json",
    "03_dense_walls":  MAP_DIR / "03_dense_walls.json",
}
MAP_KEYS = list(MAP_FILES)
HEURISTIC_NAMES = list(HEURISTICS)
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 48
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
ASPHALT_GRAY= (200,200,200)
WALL_DARK   = ( 40, 44, 52)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)
EDGE_GOLD   = (255,190,0)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


# ---------- Option resolution ----------
def _cli_value(name: str, argv: List[str]) -> Optional[str]:
    prefix = f"--{name}="
    value = None
    for arg in argv:
        if arg.startswith(prefix):
            value = arg.split("=", 1)[1]
    return value


def resolve_heuristic_name(argv: Optional[List[str]] = None, default: str = "manhattan") -> str:
    argv = sys.argv if argv is None else argv
    name = _cli_value("heuristic", argv) or os.getenv("ASTAR_HEURISTIC") or default
    name = name.strip().lower()
    if name not in HEURISTICS:
        raise ConfigError(f"unknown heuristic {name!r}")
    return name


def resolve_speed(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv if argv is None else argv
    raw = _cli_value("speed", argv)
    if raw is None:
        return 8
    try:
        return int(max(1, min(60, int(raw))))
    except ValueError:
        raise ConfigError(f"--speed must be an integer, got {raw!r}") from None


def resolve_map_key(argv: Optional[List[str]] = None) -> str:
    argv = sys.argv if argv is None else argv
    raw = _cli_value("map", argv)
    if raw is None:
        return MAP_KEYS[0]
    try:
        return MAP_KEYS[int(raw) - 1]
    except (ValueError, IndexError):
        raise ConfigError(f"--map must be 1..{len(MAP_KEYS)}, got {raw!r}") from None


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
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: GridMap, *, map_key: str = "custom",
                 heuristic: str = "manhattan", steps_per_sec: int = 8):
        pygame.init()

        self.grid = grid
        self.selected_map_key = map_key
        self.heuristic = heuristic
        self.cell_size = self._auto_cell_size(grid)
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid_px_w = GRID_MARGIN*2 + grid.width * self.cell_size
        grid_px_h = GRID_MARGIN*2 + grid.height* self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 560)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"A* — {map_key}")

        self.open_set: set[Cell] = set()
        self.closed_set: set[Cell] = set()
        self.path: List[Cell] = []

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = steps_per_sec
        self.state = "Idle"
        self._last_metrics: Dict[str, object] = {}
        self._last_step_t = 0.0

        self.graph: NodeGraph = grid.to_graph()
        self._custom_edges = self.graph.custom_edges()
        self.search: Optional[AStarSearch] = None
        self._new_search()

        # buttons after state exists (layout refreshes their active flags)
        self._buttons: list[UIButton] = []
        self._layout(win_w, win_h)

    # ---------- search lifecycle ----------
    def _new_search(self):
        self.open_set.clear()
        self.closed_set.clear()
        self.path = []
        self._last_metrics = {"algo": "A*", "popped": 0, "open_size": 0,
                              "closed_count": 0, "path_len": 0, "total_cost": None}
        try:
            cost = self.grid.cost_model(self.heuristic)
            self.search = AStar(self.graph, cost).search(self.grid.start, self.grid.goal)
        except AStarError as ex:
            _logger.warning("Cannot search %s: %s", self.selected_map_key, ex)
            self.search = None
            self.state = type(ex).__name__
            return
        self.open_set.add(self.grid.start)
        self.state = "Idle"

    def _do_step(self):
        if self.search is None:
            self.running = False
            return
        res = self.search.step()
        for c in res.opened: self.open_set.add(c)
        for c in res.closed:
            self.open_set.discard(c)
            self.closed_set.add(c)
        if res.path is not None: self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
        else:
            self.state = "Running" if self.running else "Paused"
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // self.grid.width
        cs_by_h = avail_h // self.grid.height
        self.cell_size = int(max(8, min(cs_by_w, cs_by_h)))

        grid_plate_w = self.grid.width  * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.height * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: GridMap) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(14, min(CELL_SIZE_DEFAULT, target_h // grid.height))

    def run(self):
        while True:
            if not self._handle_events():
                break
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)
        pygame.quit()

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    return False
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key == pygame.K_h:
                    self._cycle_heuristic()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key == pygame.K_1:
                    self._switch_map(MAP_KEYS[0])
                elif e.key == pygame.K_2:
                    self._switch_map(MAP_KEYS[1])
                elif e.key == pygame.K_3:
                    self._switch_map(MAP_KEYS[2])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)
        return True

    def _switch_map(self, key: str):
        if key not in MAP_FILES: return
        try:
            grid = load_map(MAP_FILES[key])
            graph = grid.to_graph()
        except (OSError, AStarError) as ex:
            _logger.error("Failed to load map %s: %s", key, ex)
            return
        self.grid = grid
        self.selected_map_key = key
        self.heuristic = grid.heuristic
        self.graph = graph
        self._custom_edges = self.graph.custom_edges()
        pygame.display.set_caption(f"A* — {key}")
        self.running = False
        self._new_search()
        self._layout(*self.screen.get_size())

    def _cycle_heuristic(self):
        i = HEURISTIC_NAMES.index(self.heuristic) if self.heuristic in HEURISTIC_NAMES else -1
        self.heuristic = HEURISTIC_NAMES[(i + 1) % len(HEURISTIC_NAMES)]
        self._reset()

    def _reset(self):
        self.running = False
        self._new_search()
        self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _cell_center(self, cell: Cell) -> Tuple[int, int]:
        cs = self.cell_size
        ox, oy = self._grid_origin
        return (ox + cell[0]*cs + cs//2, oy + cell[1]*cs + cs//2)

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin

        for row in range(self.grid.height):
            for col in range(self.grid.width):
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                blocked = self.graph.is_blocked((col, row))
                pygame.draw.rect(self.screen, WALL_DARK if blocked else ASPHALT_GRAY, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        # overlays
        for (col,row) in self.closed_set:
            s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(NEON_MAG_A)
            self.screen.blit(s, (ox + col*cs, oy + row*cs))

        for (col,row) in self.open_set:
            s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(NEON_CYAN_A)
            self.screen.blit(s, (ox + col*cs, oy + row*cs))

        # edges that are not plain cardinal steps
        for a, b in self._custom_edges:
            if self.grid.in_bounds(b):
                pygame.draw.line(self.screen, EDGE_GOLD, self._cell_center(a), self._cell_center(b), 2)

        if len(self.path) >= 2:
            pts = [self._cell_center(c) for c in self.path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, 5)

        self._draw_badge(self.grid.start, BLUE, "S")
        self._draw_badge(self.grid.goal,  RED,  "G")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        cx, cy = self._cell_center(cell)
        pygame.draw.circle(self.screen, color, (cx,cy), max(6, self.cell_size//2 - 4))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(cx,cy)))

    # ---------- buttons + metrics ----------
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
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset);       y += h + gap
        add("Heuristic", self._cycle_heuristic); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        for i, key in enumerate(MAP_KEYS, start=1):
            add(f"Map {i}: {key[3:].replace('_', ' ')}", lambda k=key: self._switch_map(k),
                togglable=True, store_as=f"btn_map{i}")
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        for i, key in enumerate(MAP_KEYS, start=1):
            btn = getattr(self, f"btn_map{i}", None)
            if btn is not None:
                btn.set_active(self.selected_map_key == key)

    def _toggle_run(self):
        if self.search is None or self.search.finished:
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 210), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        m = self._last_metrics
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}   Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']:g}")
        line("-" * 26)
        line(f"State: {self.state}")
        line(f"Heuristic: {self.heuristic}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    logging.basicConfig(level=logging.INFO)
    try:
        key = resolve_map_key()
        grid = load_map(MAP_FILES[key])
        heuristic = resolve_heuristic_name(default=grid.heuristic)
        speed = resolve_speed()
    except (OSError, ConfigError) as ex:
        _logger.error("Failed to start viewer: %s", ex)
        sys.exit(1)
    Viewer(grid, map_key=key, heuristic=heuristic, steps_per_sec=speed).run()


if __name__ == "__main__":
    main()
