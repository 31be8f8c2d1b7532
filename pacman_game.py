import math
import signal
import sys

import pygame

import config
from entities import Direction
from maze_layout import TileKind
from simulation import GamePhase, Simulation

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}

MOUTH_ROTATION = {
    Direction.RIGHT: 0,
    Direction.DOWN: 90,
    Direction.LEFT: 180,
    Direction.UP: 270,
}


def direction_from_key(key):
    """Map an arrow key to a Direction (None for any other key)"""
    return KEY_DIRECTIONS.get(key)


class PacmanGame:
    def __init__(self, simulation=None):
        self.sim = simulation or Simulation()
        self.cell_size = config.TILE_SIZE
        self.maze_width = self.sim.grid.width * self.cell_size
        self.maze_height = self.sim.grid.height * self.cell_size
        self.screen_width = self.maze_width
        self.screen_height = self.maze_height + 2 * self.cell_size  # UI strip

        pygame.init()

        # Setup signal handler for graceful shutdown
        def signal_handler(signum, frame):
            print("\nReceived signal, shutting down gracefully...")
            self.running = False

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption("Pacman - Ghost Merge")

        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 20, bold=True)
        self.large_font = pygame.font.SysFont("arial", 36, bold=True)

        # Colors
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.YELLOW = (255, 255, 0)
        self.BLUE = (33, 150, 243)
        self.GREEN = (16, 185, 129)
        self.GRAY = (160, 160, 160)

        self.running = True
        self.snapshot = self.sim.snapshot()

        # Mouth animation (radians fraction of PI)
        self.mouth_open = 0.2
        self.mouth_dir = 0.02

    def start_game(self):
        print("Starting new game...")
        self.sim.start_game()
        self.clock.tick()  # Don't count menu time towards pellet respawn
        self.snapshot = self.sim.snapshot()

    def handle_events(self):
        """Handle user input"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.start_game()
                elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    if self.sim.phase != GamePhase.PLAYING:
                        self.start_game()
                elif direction_from_key(event.key) is not None:
                    self.sim.request_direction(direction_from_key(event.key))

    def update(self):
        """Advance timers and run one simulation step"""
        elapsed_ms = self.clock.get_time()
        self.sim.update_timers(elapsed_ms)
        self.snapshot = self.sim.step()

        if self.sim.phase == GamePhase.PLAYING:
            self.mouth_open += self.mouth_dir
            if self.mouth_open > 0.25 or self.mouth_open < 0.05:
                self.mouth_dir *= -1

    def draw_maze(self):
        """Draw walls and pellets from the published tiles"""
        tiles = self.snapshot['tiles']
        for y in range(tiles.shape[0]):
            for x in range(tiles.shape[1]):
                px, py = x * self.cell_size, y * self.cell_size
                tile = tiles[y, x]
                if tile == TileKind.WALL:
                    rect = pygame.Rect(px + 2, py + 2, self.cell_size - 4, self.cell_size - 4)
                    pygame.draw.rect(self.screen, self.BLUE, rect, border_radius=6)
                elif tile == TileKind.PELLET:
                    center = (px + self.cell_size // 2, py + self.cell_size // 2)
                    pygame.draw.circle(self.screen, self.WHITE, center, 3)

    def draw_pacman(self):
        """Draw Pacman with animated mouth facing its direction"""
        player = self.snapshot['player']
        center = (player['x'], player['y'])
        radius = self.cell_size // 2 - 4
        pygame.draw.circle(self.screen, self.YELLOW, center, radius)

        direction = Direction.parse(player['direction'])
        if direction is None:
            return
        rotation = MOUTH_ROTATION[direction]
        mouth_angle = math.degrees(self.mouth_open * math.pi)
        start_angle = math.radians(rotation - mouth_angle)
        end_angle = math.radians(rotation + mouth_angle)
        mouth_radius = radius + 5
        pygame.draw.polygon(self.screen, self.BLACK, [
            center,
            (center[0] + math.cos(start_angle) * mouth_radius,
             center[1] + math.sin(start_angle) * mouth_radius),
            (center[0] + math.cos(end_angle) * mouth_radius,
             center[1] + math.sin(end_angle) * mouth_radius)
        ])

    def draw_eyes(self, surface, center, offset, eye_size, pupil_size):
        for side in (-1, 1):
            eye = (center[0] + side * offset, center[1])
            pygame.draw.circle(surface, self.WHITE, eye, eye_size)
            pygame.draw.circle(surface, self.BLACK, eye, pupil_size)

    def draw_ghosts(self):
        """Draw roaming ghosts; merging ones are see-through, merged ones hidden"""
        radius = self.cell_size // 2 - 4
        for ghost in self.snapshot['ghosts']:
            if ghost['merged']:
                continue

            size = self.cell_size
            sprite = pygame.Surface((size, size), pygame.SRCALPHA)
            local = (size // 2, size // 2)
            body = pygame.Rect(local[0] - radius, local[1] - radius - 2, radius * 2, radius * 2 + 2)
            pygame.draw.rect(sprite, ghost['color'], body, border_top_left_radius=radius,
                             border_top_right_radius=radius)
            self.draw_eyes(sprite, (local[0], local[1] - 4), 4, 3, 1)
            if ghost['is_merging']:
                sprite.set_alpha(150)

            self.screen.blit(sprite, sprite.get_rect(center=(ghost['x'], ghost['y'])))

    def draw_ultimate_ghost(self):
        ultimate = self.snapshot['ultimate_ghost']
        if ultimate is None:
            return
        radius = (self.cell_size // 2 - 4) * 1.8
        center = (ultimate['x'], ultimate['y'])
        pygame.draw.circle(self.screen, ultimate['color'], center, radius)
        self.draw_eyes(self.screen, (center[0], center[1] - 6), 10, 8, 4)

        label = self.font.render("ULTIMATE GHOST", True, ultimate['color'])
        self.screen.blit(label, label.get_rect(center=(center[0], center[1] + radius + 14)))

    def draw_ui(self):
        """Draw score and pellet counter below the maze"""
        ui_y = self.maze_height + 10
        score_text = self.font.render(f"Score: {self.snapshot['score']:05d}", True, self.WHITE)
        self.screen.blit(score_text, (10, ui_y))

        pellets_text = self.font.render(f"Pellets Left: {self.snapshot['pellets_left']}", True, self.WHITE)
        self.screen.blit(pellets_text, (self.screen_width - pellets_text.get_width() - 10, ui_y))

    def draw_overlay(self, title, message, color):
        overlay = pygame.Surface((self.maze_width, self.maze_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 180))
        self.screen.blit(overlay, (0, 0))

        center_x, center_y = self.maze_width // 2, self.maze_height // 2
        title_text = self.large_font.render(title, True, color)
        self.screen.blit(title_text, title_text.get_rect(center=(center_x, center_y - 40)))
        message_text = self.font.render(message, True, self.WHITE)
        self.screen.blit(message_text, message_text.get_rect(center=(center_x, center_y + 5)))
        hint_text = self.font.render("Press ENTER to play", True, self.GRAY)
        self.screen.blit(hint_text, hint_text.get_rect(center=(center_x, center_y + 45)))

    def draw(self):
        """Draw everything"""
        self.screen.fill(self.BLACK)
        self.draw_maze()
        self.draw_pacman()
        self.draw_ghosts()
        self.draw_ultimate_ghost()
        self.draw_ui()

        phase = self.sim.phase
        if phase == GamePhase.NOT_STARTED:
            self.draw_overlay("Ready to Play?", "Arrow keys to move. Avoid the ghosts!", self.YELLOW)
        elif phase == GamePhase.WON:
            self.draw_overlay("Victory!", f"You reached {self.snapshot['score']} points!", self.GREEN)
        elif phase == GamePhase.LOST:
            self.draw_overlay("Game Over", f"The ghosts caught you. Final score: {self.snapshot['score']}",
                              (255, 0, 0))

        pygame.display.flip()

    def run(self):
        """Main game loop: one simulation step per frame"""
        try:
            while self.running:
                self.handle_events()
                self.update()
                self.draw()
                self.clock.tick(config.TARGET_FPS)
        except KeyboardInterrupt:
            print("\nGame interrupted by user")
        finally:
            print("Cleaning up resources...")
            pygame.quit()
            print("Game exited successfully")


def main():
    game = PacmanGame()
    game.run()
    sys.exit(0)


if __name__ == "__main__":
    main()
