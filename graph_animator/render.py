import os
import shutil
from typing import List, Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
import matplotlib.patches as patches
from PIL import Image
from tqdm import tqdm

from .config import (ALGORITHM_NAMES, BG_COLOR, CURRENT_COLOR, DEFAULT_DELAY_MS, DPI, EDGE_COLOR,
                     FIG_HEIGHT, FIG_WIDTH, FRONTIER_COLOR, HOLD_FINAL_SECONDS, LABEL_COLOR,
                     NODE_COLOR, NODE_OUTLINE, NODE_RADIUS, PULSE_SPEED, TARGET_FPS, TEXT_COLOR,
                     VISITED_COLOR, WEIGHT_COLOR)
from .graph import Graph
from .state import EMPTY_SNAPSHOT, Snapshot, format_distance, format_info


def node_color(node_id: str, snapshot: Snapshot) -> str:
    if snapshot.current == node_id:
        return CURRENT_COLOR
    if snapshot.in_frontier(node_id):
        return FRONTIER_COLOR
    if snapshot.is_visited(node_id):
        return VISITED_COLOR
    return NODE_COLOR


def create_figure():
    fig = plt.figure(figsize=(FIG_WIDTH, FIG_HEIGHT), dpi=DPI)
    fig.patch.set_facecolor(BG_COLOR)
    graph_axes = fig.add_axes([0.0, 0.25, 1.0, 0.75])
    info_axes = fig.add_axes([0.0, 0.0, 1.0, 0.25])
    return fig, graph_axes, info_axes


def draw_graph(axes, graph: Graph, snapshot: Snapshot = EMPTY_SNAPSHOT,
               pulse_factor: float = 1.0, selected: Optional[str] = None):
    axes.clear()
    axes.set_xlim(0, graph.width)
    # canvas coordinates grow downwards
    axes.set_ylim(graph.height, 0)
    axes.set_aspect('equal')
    axes.set_facecolor(BG_COLOR)
    axes.axis('off')

    for edge in graph.edges:
        a = graph.get_node(edge.source)
        b = graph.get_node(edge.target)
        axes.plot([a.x, b.x], [a.y, b.y], color=EDGE_COLOR, linewidth=2, zorder=1)
        axes.text((a.x + b.x) / 2, (a.y + b.y) / 2 - 10, str(edge.weight),
                  color=WEIGHT_COLOR, fontsize=9, ha='center', va='center', zorder=2)

    for node in graph.nodes:
        color = node_color(node.id, snapshot)
        axes.add_patch(plt.Circle((node.x, node.y), NODE_RADIUS, facecolor=color,
                                  edgecolor=NODE_OUTLINE, linewidth=2, zorder=10))
        axes.text(node.x, node.y, node.id, color=LABEL_COLOR, fontsize=10,
                  ha='center', va='center', weight='bold', zorder=11)

        if node.id == snapshot.current:
            glow = NODE_RADIUS * 1.25 * pulse_factor
            axes.add_patch(plt.Circle((node.x, node.y), glow, fill=False,
                                      edgecolor=CURRENT_COLOR, alpha=0.5, linewidth=2, zorder=9))
        if node.id == selected:
            axes.add_patch(plt.Circle((node.x, node.y), NODE_RADIUS + 5, fill=False,
                                      edgecolor=FRONTIER_COLOR, linewidth=3, zorder=9))
        if snapshot.distances is not None:
            axes.text(node.x, node.y + NODE_RADIUS + 12,
                      f"d={format_distance(snapshot.distance_to(node.id))}",
                      color=TEXT_COLOR, fontsize=8, ha='center', va='center', zorder=11)


def draw_info(axes, snapshot: Snapshot, algorithm: Optional[str] = None):
    axes.clear()
    axes.set_xlim(0, 1)
    axes.set_ylim(0, 1)
    axes.set_facecolor(BG_COLOR)
    axes.axis('off')

    algorithm = algorithm or snapshot.algorithm
    title = ALGORITHM_NAMES.get(algorithm, 'Graph')
    axes.text(0.5, 0.88, title, color=TEXT_COLOR, fontsize=14, ha='center', weight='bold')

    legend = [(CURRENT_COLOR, 'Current'), (FRONTIER_COLOR, 'Frontier'),
              (VISITED_COLOR, 'Visited'), (NODE_COLOR, 'Unvisited')]
    for i, (color, label) in enumerate(legend):
        x = 0.62 + (i % 2) * 0.18
        y = 0.58 - (i // 2) * 0.2
        axes.add_patch(patches.Rectangle((x, y), 0.03, 0.1, color=color))
        axes.text(x + 0.04, y + 0.05, label, color=TEXT_COLOR, fontsize=9, va='center')

    for i, line in enumerate(format_info(snapshot, algorithm).lines()):
        axes.text(0.03, 0.66 - i * 0.18, line, color=TEXT_COLOR, fontsize=9, va='center',
                  wrap=True)


def draw_frame(fig_axes, graph: Graph, snapshot: Snapshot, algorithm: Optional[str] = None,
               frame_index: int = 0):
    fig, graph_axes, info_axes = fig_axes
    pulse_factor = 1.0 + 0.1 * np.sin(frame_index * PULSE_SPEED)
    draw_graph(graph_axes, graph, snapshot, pulse_factor)
    draw_info(info_axes, snapshot, algorithm)
    return fig


def figure_to_image(fig) -> Image.Image:
    fig.canvas.draw()
    buffer = np.asarray(fig.canvas.buffer_rgba())
    return Image.fromarray(buffer).convert('RGB')


def frames_per_snapshot(delay_ms: float, fps: int = TARGET_FPS) -> int:
    return max(1, int(round(delay_ms * fps / 1000.0)))


def create_animation_frames(snapshots: Sequence[Snapshot], delay_ms: float = DEFAULT_DELAY_MS,
                            fps: int = TARGET_FPS) -> List[Snapshot]:
    if not snapshots:
        return [EMPTY_SNAPSHOT]
    frames = []
    per_snapshot = frames_per_snapshot(delay_ms, fps)
    for snapshot in snapshots:
        frames.extend([snapshot] * per_snapshot)
    frames.extend([snapshots[-1]] * (HOLD_FINAL_SECONDS * fps))
    return frames


class TqdmProgressCallback:
    def __init__(self, total, desc="Saving Video"):
        self.pbar = tqdm(total=total, desc=desc, unit="frame", ncols=100)

    def __call__(self, current_frame, total_frames):
        self.pbar.update(1)

    def close(self):
        self.pbar.close()


def create_animation(graph: Graph, snapshots: Sequence[Snapshot], algorithm: Optional[str] = None,
                     delay_ms: float = DEFAULT_DELAY_MS, fps: int = TARGET_FPS):
    frames = create_animation_frames(snapshots, delay_ms, fps)
    fig_axes = create_figure()

    def update(i):
        if i >= len(frames):
            return
        draw_frame(fig_axes, graph, frames[i], algorithm, i)

    ani = animation.FuncAnimation(
        fig_axes[0],
        update,
        frames=len(frames),
        blit=False,
        interval=1000 / fps,
        repeat=False
    )
    return ani, fig_axes[0], frames


def save_video(graph: Graph, snapshots: Sequence[Snapshot], output_file: str,
               algorithm: Optional[str] = None, delay_ms: float = DEFAULT_DELAY_MS,
               fps: int = TARGET_FPS) -> str:
    ffmpeg_path = shutil.which('ffmpeg')
    if not ffmpeg_path:
        print("WARNING: ffmpeg not found. Animation saving will likely fail.")
        print("Please install ffmpeg and ensure it's in your system's PATH.")
    else:
        plt.rcParams['animation.ffmpeg_path'] = ffmpeg_path

    ani, fig, frames = create_animation(graph, snapshots, algorithm, delay_ms, fps)
    writer = animation.FFMpegWriter(
        fps=fps,
        metadata=dict(artist='Graph Algorithm Animator'),
        bitrate=3000
    )
    progress_bar = TqdmProgressCallback(len(frames))

    print(f"Saving animation to {output_file}...")
    try:
        ani.save(output_file, writer=writer, progress_callback=progress_bar)
        print("Video saving complete.")
    except Exception as e:
        print(f"\nError during video saving: {e}")
        print("Check ffmpeg installation or the output path.")
        raise
    finally:
        progress_bar.close()
        plt.close(fig)
    return output_file


def save_gif(graph: Graph, snapshots: Sequence[Snapshot], output_file: str,
             algorithm: Optional[str] = None, delay_ms: float = DEFAULT_DELAY_MS) -> str:
    snapshots = list(snapshots) or [EMPTY_SNAPSHOT]
    fig_axes = create_figure()
    images = []
    try:
        for i, snapshot in enumerate(tqdm(snapshots, desc="Rendering GIF", unit="step", ncols=100)):
            draw_frame(fig_axes, graph, snapshot, algorithm, i)
            images.append(figure_to_image(fig_axes[0]))
    finally:
        plt.close(fig_axes[0])

    durations = [int(delay_ms)] * len(images)
    durations[-1] = int(delay_ms + HOLD_FINAL_SECONDS * 1000)
    images[0].save(output_file, save_all=True, append_images=images[1:],
                   duration=durations, loop=0)
    print(f"GIF saved as: {output_file}")
    return output_file


def export(graph: Graph, snapshots: Sequence[Snapshot], output_file: str,
           algorithm: Optional[str] = None, delay_ms: float = DEFAULT_DELAY_MS) -> str:
    extension = os.path.splitext(output_file)[1].lower()
    if extension == '.gif':
        return save_gif(graph, snapshots, output_file, algorithm, delay_ms)
    return save_video(graph, snapshots, output_file, algorithm, delay_ms)


class LiveRenderer:
    """on_state/on_info callbacks that redraw an interactive matplotlib window."""

    def __init__(self, graph_source, algorithm: Optional[str] = None):
        # graph_source is a Graph or a callable returning the graph to draw
        self.graph_source = graph_source
        self.algorithm = algorithm
        self.fig_axes = create_figure()
        self.frame_index = 0
        self.info = None

    @property
    def graph(self) -> Graph:
        if callable(self.graph_source):
            return self.graph_source()
        return self.graph_source

    def __call__(self, snapshot: Snapshot):
        draw_frame(self.fig_axes, self.graph, snapshot, self.algorithm, self.frame_index)
        self.frame_index += 1
        canvas = self.fig_axes[0].canvas
        canvas.draw_idle()
        canvas.flush_events()

    def on_info(self, info):
        self.info = info

    def close(self):
        plt.close(self.fig_axes[0])
