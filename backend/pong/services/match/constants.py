# Court and entity geometry, in court units (pixels on the reference client)
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 500
PADDLE_WIDTH = 10
PADDLE_HEIGHT = 100
PADDLE_MARGIN = 10
BALL_SIZE = 10

PADDLE_SPEED = 8
BALL_BASE_SPEED = 5.0
BALL_SPEED_INCREMENT = 0.5

DEFAULT_TICK_RATE_HZ = 60

PLAYER_ONE = 'player1'
PLAYER_TWO = 'player2'
WAITING_PLAYER_NAME = 'Waiting...'

DIRECTIONS = {
    'up': -1,
    'down': 1,
    'stop': 0,
}
