import random

import matplotlib.pyplot as plt

from .config import ALGORITHM_NAMES, DEFAULT_DELAY_MS
from .controller import AnimationController
from .graph import random_graph, sample_graph
from .render import LiveRenderer, export
from .runners import collect_snapshots


def preview(graph, algorithm, delay_ms=DEFAULT_DELAY_MS):
    plt.ion()
    renderer = LiveRenderer(graph, algorithm)
    controller = AnimationController(on_state=renderer, on_info=renderer.on_info,
                                     delay_ms=delay_ms)
    try:
        outcome = controller.run(algorithm, graph)
    except KeyboardInterrupt:
        controller.stop()
        print("Preview interrupted")
        return None
    finally:
        plt.ioff()
    if renderer.info is not None:
        for line in renderer.info.lines():
            print(f"  {line}")
    plt.show()
    renderer.close()
    return outcome


def main():
    algorithms = {
        '1': 'bfs',
        '2': 'dfs',
        '3': 'dijkstra',
    }

    print("Available algorithms:")
    for key, name in algorithms.items():
        print(f"{key}. {ALGORITHM_NAMES[name]}")

    choice = input("Choose algorithm (1-3): ").strip()
    if choice in algorithms:
        algorithm = algorithms[choice]
    else:
        print("Invalid choice. Using BFS as default.")
        algorithm = 'bfs'

    use_random = input("Use a random graph instead of the sample graph? [y/N]: ").strip().lower()
    if use_random == 'y':
        graph = random_graph(random.Random())
    else:
        graph = sample_graph()
    print(f"Graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges")

    print("Output:")
    print("1. Live preview")
    print("2. Save video (.mp4)")
    print("3. Save GIF (.gif)")
    output_choice = input("Choose output (1-3): ").strip()

    if output_choice in ('2', '3'):
        extension = 'mp4' if output_choice == '2' else 'gif'
        output_file = f"{algorithm}_visualization.{extension}"
        print(f"Running {ALGORITHM_NAMES[algorithm]}...")
        snapshots = collect_snapshots(algorithm, graph)
        print(f"Captured {len(snapshots)} steps")
        export(graph, snapshots, output_file, algorithm)
    else:
        preview(graph, algorithm)


if __name__ == "__main__":
    main()
