from .constants import CANVAS_HEIGHT, PADDLE_HEIGHT, PADDLE_SPEED, PADDLE_WIDTH


class Paddle:
    """Vertical actuator at a fixed x, driven by a directional intent."""

    def __init__(self, x: float, court_height: int = CANVAS_HEIGHT):
        self.x = x
        self.width = PADDLE_WIDTH
        self.height = PADDLE_HEIGHT
        self.speed = PADDLE_SPEED
        self.court_height = court_height
        self.y = court_height / 2 - self.height / 2
        self.direction = 0

    @property
    def max_y(self) -> float:
        return self.court_height - self.height

    def update(self) -> None:
        self.y += self.direction * self.speed
        if self.y < 0:
            self.y = 0
        elif self.y > self.max_y:
            self.y = self.max_y

    def set_direction(self, direction: int) -> None:
        if direction not in (-1, 0, 1):
            raise ValueError(f'Invalid paddle direction: {direction!r}')
        self.direction = direction

    def __repr__(self):
        return f'Paddle(x={self.x}, y={self.y}, direction={self.direction})'
