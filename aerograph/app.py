import logging

import numpy as np
import pygame

from .brush import Brush, ToolMode, screen_to_grid
from .config import DEFAULT_CONFIG
from .render import composite, density_to_rgba
from .solver import FluidSolver

logger = logging.getLogger(__name__)

TOOL_KEYS = {
    pygame.K_1: ToolMode.SMOKE,
    pygame.K_2: ToolMode.WIND,
    pygame.K_3: ToolMode.ERASER,
}


class App:
    def __init__(self, config=DEFAULT_CONFIG):
        self.config = config.validate()
        display = config.display

        pygame.init()
        pygame.display.set_caption("Aerograph (Stable Fluids)")
        self.screen = pygame.display.set_mode((display.window, display.window))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 16)

        self.fluid = FluidSolver.from_config(config.simulation)
        self.brush = Brush(config.brush)

        # UI state
        self.running = True
        self.paused = False
        self.mode = ToolMode.SMOKE
        self.prev_mouse = None

    def grid_from_screen(self, pos):
        w, h = self.screen.get_size()
        return screen_to_grid(pos[0], pos[1], w, h, self.fluid.size)

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                    logger.info("Paused" if self.paused else "Resumed")
                elif event.key == pygame.K_c:
                    self.fluid.reset()
                elif event.key == pygame.K_LEFTBRACKET:
                    self.brush.resize(-1)
                elif event.key == pygame.K_RIGHTBRACKET:
                    self.brush.resize(+1)
                elif event.key in TOOL_KEYS:
                    self.mode = TOOL_KEYS[event.key]
                    logger.info("Tool: %s", self.mode.value)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.prev_mouse = self.grid_from_screen(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.prev_mouse = None
            elif event.type == pygame.MOUSEMOTION and self.prev_mouse is not None:
                current = self.grid_from_screen(event.pos)
                self.brush.stroke(self.fluid, self.prev_mouse, current, self.mode)
                self.prev_mouse = current

    # ---- Rendering ----
    def render(self):
        display = self.config.display
        rgba = density_to_rgba(self.fluid.density_view(), display.smoke_color)
        rgb = composite(rgba, display.background)
        # surfarray wants [x, y]
        surf = pygame.surfarray.make_surface(np.transpose(rgb, (1, 0, 2)))
        surf = pygame.transform.smoothscale(surf, self.screen.get_size())
        self.screen.blit(surf, (0, 0))
        self.draw_hud()
        pygame.display.flip()

    def draw_hud(self):
        lines = [
            f"[1] smoke [2] wind [3] eraser: {self.mode.value}   radius=[{self.brush.radius}]",
            f"[C] clear  [Space] pause  [Esc] quit   FPS: {self.clock.get_fps():.0f}   paused: {self.paused}",
        ]
        y = 6
        for s in lines:
            surf = self.font.render(s, True, (200, 200, 200))
            self.screen.blit(surf, (8, y))
            y += 18

    def run(self):
        sim = self.config.simulation
        logger.info("Starting %dx%d simulation", sim.resolution, sim.resolution)
        while self.running:
            self.clock.tick(self.config.display.fps)
            self.handle_input()
            if not self.paused:
                self.fluid.step(sim.iterations, sim.fade_rate)
            self.render()
        pygame.quit()
