import pygame
from mazegen.algo.growing_tree import GrowingTreeMaze
from mazegen.core.grid import Coordinate, Direction, Face, Sign


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_ACTIVE = (60, 100, 160)# Blue tint
    COLOR_COMPLETED = (40, 60, 80)
    COLOR_ROOT = (200, 60, 60)
    COLOR_ENTRANCE = (0, 255, 127)
    COLOR_EXIT = (255, 69, 0)

    AUTOPLAY_STEPS = 1  # Steps per frame while autoplaying

    def __init__(self, maze: GrowingTreeMaze, width=1280, height=720):
        self.maze = maze
        self.grid = maze.grid
        self.screen_width = width
        self.screen_height = height

        # First two axes are drawn, axis 2 (if any) is browsed by layer
        self.cols = self.grid.shape[0]
        self.rows = self.grid.shape[1] if self.grid.dimensions > 1 else 1
        self.layer = 0

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.autoplay = False
        self.autoplay_backwards = False

    @property
    def layer_count(self) -> int:
        return self.grid.shape[2] if self.grid.dimensions > 2 else 1

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        zoom_x = available_w / self.cols
        zoom_y = available_h / self.rows

        # Taking minimum zoom to fit both dimensions
        self.cell_size = min(zoom_x, zoom_y)

        # Center
        total_maze_w = self.cols * self.cell_size
        total_maze_h = self.rows * self.cell_size

        self.offset_x = (self.screen_width - total_maze_w) / 2
        self.offset_y = (self.screen_height - total_maze_h) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"mazegen - {'x'.join(str(e) for e in self.grid.shape)}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        # Initial fit
        self.fit_to_screen()

    def cell_at(self, x: int, y: int) -> Coordinate:
        """Maze coordinate drawn at column x, row y of the current layer."""
        indices = [0] * self.grid.dimensions
        indices[0] = x
        if self.grid.dimensions > 1:
            indices[1] = y
        if self.grid.dimensions > 2:
            indices[2] = self.layer
        return Coordinate(indices)

    def world_to_screen(self, wx, wy):
        sx = wx * self.cell_size + self.offset_x
        sy = wy * self.cell_size + self.offset_y
        return sx, sy

    def step(self, backwards: bool = False):
        if backwards:
            self.maze.reverse_generation()
        else:
            self.maze.advance_generation()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_RIGHT:
                    self.step()
                elif event.key == pygame.K_LEFT:
                    self.step(backwards=True)
                elif event.key == pygame.K_SPACE:
                    self.autoplay = not self.autoplay
                elif event.key == pygame.K_b:
                    self.autoplay_backwards = not self.autoplay_backwards
                elif event.key == pygame.K_r:
                    self.maze.reset_generation()
                    self.autoplay = False
                elif event.key == pygame.K_PAGEUP:
                    self.layer = min(self.layer + 1, self.layer_count - 1)
                elif event.key == pygame.K_PAGEDOWN:
                    self.layer = max(self.layer - 1, 0)

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()

                # World coord before zoom
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed

                # Clamp zoom
                self.cell_size = max(1.0, min(200.0, self.cell_size))

                # Adjust offset to keep mouse at same world coord
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]: # Left or Right drag
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def cell_color(self, cell: Coordinate, active: set, completed: set):
        if cell == self.maze.entrance:
            return self.COLOR_ENTRANCE
        if cell == self.maze.exit:
            return self.COLOR_EXIT
        if cell in active:
            return self.COLOR_ROOT if cell == self.maze.root else self.COLOR_ACTIVE
        if cell in completed:
            return self.COLOR_COMPLETED
        return None

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        active = set(self.maze.visited_cells)
        completed = set(self.maze.completed_cells)

        size = int(self.cell_size) + 1
        x_axis_pos = Direction(0, Sign.POSITIVE)
        x_axis_neg = Direction(0, Sign.NEGATIVE)
        y_axis_pos = Direction(1, Sign.POSITIVE)
        y_axis_neg = Direction(1, Sign.NEGATIVE)

        # 1. Cell backgrounds
        for y in range(self.rows):
            for x in range(self.cols):
                cell = self.cell_at(x, y)
                color = self.cell_color(cell, active, completed)
                if color is not None:
                    px, py = self.world_to_screen(x, y)
                    pygame.draw.rect(self.surface, color, (int(px), int(py), size, size))

        # 2. Walls, each internal wall drawn once from its positive side
        for y in range(self.rows):
            for x in range(self.cols):
                cell = self.cell_at(x, y)
                px, py = self.world_to_screen(x, y)
                px, py = int(px), int(py)

                if self.grid.has_wall(Face(cell, x_axis_pos)):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)
                if x == 0 and self.grid.has_wall(Face(cell, x_axis_neg)):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), 1)

                if self.grid.dimensions > 1:
                    if self.grid.has_wall(Face(cell, y_axis_pos)):
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
                    if y == 0 and self.grid.has_wall(Face(cell, y_axis_neg)):
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
                else:
                    # A 1-D maze is a single row with closed top and bottom
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        mode = ""
        if self.autoplay:
            mode = "Autoplay (reverse)" if self.autoplay_backwards else "Autoplay"
        info = [
            f"FPS: {fps}",
            f"Shape: {'x'.join(str(e) for e in self.grid.shape)} ({self.grid.size:,})",
            f"Seed: {self.maze.random.seed}",
            f"State: {self.maze.get_state()}",
            f"Step: {self.maze.step_count}",
            f"Remaining: {self.maze.remaining_cells}",
            f"Layer: {self.layer + 1}/{self.layer_count}" if self.layer_count > 1 else "",
            mode,
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()

            if self.autoplay:
                for _ in range(self.AUTOPLAY_STEPS):
                    self.step(backwards=self.autoplay_backwards)
                if self.autoplay_backwards and self.maze.step_count == 0:
                    self.autoplay = False
                elif not self.autoplay_backwards and self.maze.is_generation_finished():
                    self.autoplay = False

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            self.clock.tick(60)

        pygame.quit()
