# viewer.py

"""
================================================================================
INTERACTIVE MAP PREVIEW
================================================================================
A small Pygame window that shows the top-down preview of a generated map.

Controls:
    W/A/S/D      pan
    Mouse wheel  zoom
    R            regenerate with a fresh random seed
    Esc          quit

Usage:
    python viewer.py [path/to/config.json]
================================================================================
"""

import json
import logging
import os
import sys

import numpy as np
import pygame

from terrain_generator import color_maps
from terrain_generator import config as DEFAULTS
from terrain_generator.generator import TerrainGenerator

# --- Application Constants ---
PAN_SPEED_PIXELS = 15
ZOOM_SPEED = 0.1
MAX_ZOOM = 8.0
MIN_ZOOM = 0.1
BACKGROUND_COLOR = (10, 10, 20)

class Camera:
    """A simple camera for the viewer to handle pan and zoom."""
    def __init__(self, screen_width, screen_height, world_pixel_width, world_pixel_height):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.fit(world_pixel_width, world_pixel_height)

    def fit(self, world_pixel_width, world_pixel_height):
        """Centers the camera on the map and zooms so it fills the screen."""
        self.world_pixel_width = world_pixel_width
        self.world_pixel_height = world_pixel_height

        zoom_x = self.screen_width / self.world_pixel_width
        zoom_y = self.screen_height / self.world_pixel_height
        self.zoom = min(MAX_ZOOM, max(MIN_ZOOM, min(zoom_x, zoom_y)))

        self.x = self.world_pixel_width / 2
        self.y = self.world_pixel_height / 2

    def world_to_screen(self, world_x, world_y):
        screen_x = (world_x - self.x) * self.zoom + self.screen_width / 2
        screen_y = (world_y - self.y) * self.zoom + self.screen_height / 2
        return screen_x, screen_y

    def pan(self, dx, dy):
        # Panning speed should be independent of zoom level
        self.x += dx / self.zoom
        self.y += dy / self.zoom

    def zoom_in(self):
        self.zoom = min(MAX_ZOOM, self.zoom * (1 + ZOOM_SPEED))

    def zoom_out(self):
        self.zoom = max(MIN_ZOOM, self.zoom * (1 - ZOOM_SPEED))

class ViewerApp:
    """The main application class for the map preview."""
    def __init__(self, config: dict):
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        self.logger = logging.getLogger(__name__)

        self.params = dict(config.get('terrain_generation_parameters', {}))
        preview = config.get('preview', {})
        self.tile_pixels = preview.get('tile_pixels', DEFAULTS.PREVIEW_TILE_PIXELS)

        self.logger.info("Initializing Pygame...")
        pygame.init()

        self.screen_width = preview.get('screen_width', 1280)
        self.screen_height = preview.get('screen_height', 720)
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))

        self.clock = pygame.time.Clock()
        self.is_running = True
        self.map_surface = None
        self.generator = None

        self.regenerate(seed=self.params.get('seed'))
        self.camera = Camera(self.screen_width, self.screen_height,
                             self.map_surface.get_width(), self.map_surface.get_height())

    def regenerate(self, seed=None):
        """Runs the generator again and rebuilds the preview surface."""
        params = dict(self.params, seed=seed)
        self.generator = TerrainGenerator(config=params, logger=self.logger)
        grid = self.generator.generate()

        colors = color_maps.get_tile_color_array(grid, center_flat_radius=self.generator.config.center_flat_radius)
        image = color_maps.upscale_with_stair_markers(colors, grid, self.tile_pixels)
        # pygame surfaces are indexed [x, y], the image is [y, x].
        self.map_surface = pygame.surfarray.make_surface(np.transpose(image, (1, 0, 2)))

    def run(self):
        """The main application loop."""
        while self.is_running:
            self.handle_events()
            self.update()
            self.draw()
            self.clock.tick(60)

        self.logger.info("Exiting viewer.")
        pygame.quit()

    def handle_events(self):
        """Processes user input and other events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.is_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                # A None seed pulls fresh entropy, so every press gives a new map.
                self.regenerate(seed=None)
                self.camera.fit(self.map_surface.get_width(), self.map_surface.get_height())
            elif event.type == pygame.MOUSEWHEEL:
                if event.y > 0:
                    self.camera.zoom_in()
                elif event.y < 0:
                    self.camera.zoom_out()

    def update(self):
        """Handles continuous input like key presses for panning."""
        keys = pygame.key.get_pressed()
        if keys[pygame.K_w]:
            self.camera.pan(0, -PAN_SPEED_PIXELS)
        if keys[pygame.K_s]:
            self.camera.pan(0, PAN_SPEED_PIXELS)
        if keys[pygame.K_a]:
            self.camera.pan(-PAN_SPEED_PIXELS, 0)
        if keys[pygame.K_d]:
            self.camera.pan(PAN_SPEED_PIXELS, 0)

    def draw(self):
        """Handles all rendering for the application."""
        self.screen.fill(BACKGROUND_COLOR)

        scaled_width = max(1, round(self.map_surface.get_width() * self.camera.zoom))
        scaled_height = max(1, round(self.map_surface.get_height() * self.camera.zoom))
        scaled_surface = pygame.transform.scale(self.map_surface, (scaled_width, scaled_height))
        self.screen.blit(scaled_surface, self.camera.world_to_screen(0, 0))

        report = self.generator.relaxation_report
        pygame.display.set_caption(
            f"Map Preview | {report.passes} relaxation passes | Zoom: {self.camera.zoom:.2f}"
        )
        pygame.display.flip()

if __name__ == '__main__':
    CONFIG_PATH = sys.argv[1] if len(sys.argv) > 1 else "config.json"

    if not os.path.isfile(CONFIG_PATH):
        print(f"Error: configuration file not found at '{CONFIG_PATH}'")
    else:
        with open(CONFIG_PATH, 'r') as f:
            app = ViewerApp(config=json.load(f))
        app.run()
