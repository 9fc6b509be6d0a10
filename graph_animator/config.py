CANVAS_WIDTH = 800
CANVAS_HEIGHT = 500

NODE_RADIUS = 20
MIN_NODE_SPACING = NODE_RADIUS * 3

MIN_WEIGHT = 1
MAX_WEIGHT = 10

ALGORITHMS = ('bfs', 'dfs', 'dijkstra')
ALGORITHM_NAMES = {
    'bfs': 'Breadth-First Search (BFS)',
    'dfs': 'Depth-First Search (DFS)',
    'dijkstra': "Dijkstra's Shortest Path",
}

MIN_DELAY_MS = 100
MAX_DELAY_MS = 2000
DEFAULT_DELAY_MS = 500
SPEED_SLIDER_SUM = 2100

NO_PATHS_PLACEHOLDER = 'No paths found'
ARROW = '→'
INFINITY_LABEL = '∞'

SAMPLE_NODES = [(200, 150), (400, 150), (200, 300), (400, 300)]
SAMPLE_EDGES = [('N1', 'N4', 6), ('N4', 'N3', 6), ('N3', 'N2', 1), ('N2', 'N1', 10)]

RANDOM_POSITIONS = [(200, 150), (400, 150), (150, 300), (450, 300), (250, 400), (350, 400)]
RANDOM_EXTRA_EDGES = 3

BG_COLOR = '#F8F9FA'
NODE_COLOR = '#667EEA'
VISITED_COLOR = '#FF6B6B'
CURRENT_COLOR = '#4ECDC4'
FRONTIER_COLOR = '#FFC107'
NODE_OUTLINE = '#495057'
EDGE_COLOR = '#ADB5BD'
WEIGHT_COLOR = '#495057'
LABEL_COLOR = 'white'
TEXT_COLOR = '#212529'

FIG_WIDTH = 8
FIG_HEIGHT = 6
DPI = 100
TARGET_FPS = 30
HOLD_FINAL_SECONDS = 2
PULSE_SPEED = 0.3
