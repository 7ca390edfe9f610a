import random
from typing import Optional

from .constants import (
    BALL_BASE_SPEED,
    BALL_SIZE,
    BALL_SPEED_INCREMENT,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
)
from .paddle import Paddle


class Ball:
    """Square ball travelling diagonally at a scalar speed.

    Direction is kept as one unit sign per axis (``x_orientation`` and
    ``y_orientation``, each -1 or +1); speed only grows during a rally and
    goes back to the base value on every reset.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 court_width: int = CANVAS_WIDTH, court_height: int = CANVAS_HEIGHT):
        self.width = BALL_SIZE
        self.height = BALL_SIZE
        self.court_width = court_width
        self.court_height = court_height
        self._rng = rng or random.Random()
        self.reset()

    def _draw_orientation(self) -> int:
        return 1 if self._rng.random() > 0.5 else -1

    def reset(self) -> None:
        self.x = self.court_width / 2 - self.width / 2
        self.y = self.court_height / 2 - self.height / 2
        self.x_orientation = self._draw_orientation()
        self.y_orientation = self._draw_orientation()
        self.speed = BALL_BASE_SPEED

    def update(self, paddle1: Paddle, paddle2: Paddle) -> None:
        # Wall check runs on the position from the previous tick
        if self.y + self.height >= self.court_height or self.y <= 0:
            self.y_orientation *= -1

        self.x += self.speed * self.x_orientation
        self.y += self.speed * self.y_orientation

        self.check_paddle_collision(paddle1)
        self.check_paddle_collision(paddle2)

    def overlaps(self, paddle: Paddle) -> bool:
        return (
            self.x < paddle.x + paddle.width
            and self.x + self.width > paddle.x
            and self.y < paddle.y + paddle.height
            and self.y + self.height > paddle.y
        )

    def check_paddle_collision(self, paddle: Paddle) -> bool:
        """Bounce off ``paddle`` if overlapping it while heading its way.

        A ball still overlapping a paddle it has already bounced off is
        travelling away from that paddle's half and is left alone.
        Returns True when the ball was reflected.
        """
        if not self.overlaps(paddle):
            return False
        half = self.court_width / 2
        towards = (
            (self.x_orientation == -1 and paddle.x < half)
            or (self.x_orientation == 1 and paddle.x > half)
        )
        if not towards:
            return False
        self.x_orientation *= -1
        self.speed += BALL_SPEED_INCREMENT
        return True

    def __repr__(self):
        return (
            f'Ball(x={self.x}, y={self.y}, orientation=({self.x_orientation}, '
            f'{self.y_orientation}), speed={self.speed})'
        )
