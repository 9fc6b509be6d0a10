import math

import pytest

from graph_animator.errors import EmptyGraphError, UnknownAlgorithmError, UnknownNodeError
from graph_animator.runners import (BFSRunner, DFSRunner, DijkstraRunner, RunnerStatus,
                                    collect_snapshots, create_runner, describe_paths,
                                    shortest_path)
from graph_animator.state import AlgorithmState


class TestBFS:

    def test_visit_order_on_sample_graph(self, graph):
        snapshots = collect_snapshots('bfs', graph)
        assert list(snapshots[-1].result) == ['N1', 'N2', 'N4', 'N3']

    def test_initial_snapshot(self, graph):
        runner = BFSRunner(graph, 'N1')
        first = runner.next()
        assert first.step == 0
        assert first.visited == ('N1',)
        assert first.frontier == ('N1',)
        assert first.result == ('N1',)
        assert first.current is None
        assert first.distances is None

    def test_dequeue_steps(self, graph):
        snapshots = collect_snapshots('bfs', graph)
        assert [s.current for s in snapshots[1:]] == ['N1', 'N2', 'N4', 'N3']
        assert [s.step for s in snapshots] == [0, 1, 2, 3, 4]
        # frontier shows what is left after the dequeue
        assert snapshots[1].frontier == ()
        assert snapshots[2].frontier == ('N4',)
        assert snapshots[3].frontier == ('N3',)

    def test_exploration_happens_between_snapshots(self, graph):
        """Neighbours of the node just shown appear only in the next snapshot."""
        runner = BFSRunner(graph, 'N1')
        runner.next()
        shown = runner.next()
        assert shown.current == 'N1'
        assert shown.result == ('N1',)
        following = runner.next()
        assert following.result == ('N1', 'N2', 'N4')

    def test_completes(self, graph):
        runner = BFSRunner(graph, 'N1')
        list(runner)
        assert runner.status is RunnerStatus.COMPLETED
        assert not runner.has_next()
        with pytest.raises(StopIteration):
            runner.next()

    def test_unreachable_nodes_not_visited(self, disconnected_graph):
        snapshots = collect_snapshots('bfs', disconnected_graph)
        assert snapshots[-1].result == ('N1', 'N2')
        assert set(snapshots[-1].visited) == {'N1', 'N2'}

    def test_single_node(self, empty_graph):
        empty_graph.add_node(100, 100)
        snapshots = collect_snapshots('bfs', empty_graph)
        assert len(snapshots) == 2
        assert snapshots[-1].current == 'N1'
        assert snapshots[-1].result == ('N1',)


class TestDFS:

    def test_visit_order_on_sample_graph(self, graph):
        """Nodes are recorded when pushed, larger ids first."""
        snapshots = collect_snapshots('dfs', graph)
        assert list(snapshots[-1].result) == ['N1', 'N4', 'N2', 'N3']

    def test_pop_order_is_ascending(self, graph):
        snapshots = collect_snapshots('dfs', graph)
        assert [s.current for s in snapshots[1:]] == ['N1', 'N2', 'N3', 'N4']

    def test_stack_contents(self, graph):
        snapshots = collect_snapshots('dfs', graph)
        assert snapshots[2].frontier == ('N4',)
        assert snapshots[3].frontier == ('N4',)
        assert snapshots[4].frontier == ()

    def test_node_pushed_once(self, graph):
        snapshots = collect_snapshots('dfs', graph)
        currents = [s.current for s in snapshots[1:]]
        assert len(currents) == len(set(currents))

    def test_path_graph_goes_deep(self, empty_graph):
        for i in range(5):
            empty_graph.add_node(80 + i * 150, 100 + (i % 2) * 200)
        empty_graph.add_edge('N1', 'N2', 1)
        empty_graph.add_edge('N1', 'N3', 1)
        empty_graph.add_edge('N2', 'N4', 1)
        empty_graph.add_edge('N3', 'N5', 1)
        snapshots = collect_snapshots('dfs', empty_graph)
        assert [s.current for s in snapshots[1:]] == ['N1', 'N2', 'N4', 'N3', 'N5']


class TestDijkstra:

    def test_distances_on_sample_graph(self, graph):
        final = collect_snapshots('dijkstra', graph)[-1]
        assert final.distances['N1'] == 0
        assert final.distances['N4'] == 6
        # the direct edge beats N1-N4-N3-N2 (13)
        assert final.distances['N2'] == 10
        # via N2 (10 + 1) beats via N4 (6 + 6)
        assert final.distances['N3'] == 11

    def test_result_descriptions(self, graph):
        final = collect_snapshots('dijkstra', graph)[-1]
        assert list(final.result) == [
            'N1→N2: N1→N2 (cost: 10)',
            'N1→N3: N1→N2→N3 (cost: 11)',
            'N1→N4: N1→N4 (cost: 6)',
        ]
        assert final.current is None

    def test_selection_order(self, graph):
        snapshots = collect_snapshots('dijkstra', graph)
        assert [s.current for s in snapshots[1:-1]] == ['N1', 'N4', 'N2', 'N3']

    def test_initial_distances(self, graph):
        first = DijkstraRunner(graph, 'N1').next()
        assert first.step == 0
        assert first.distances['N1'] == 0
        assert all(math.isinf(first.distances[n]) for n in ('N2', 'N3', 'N4'))
        assert first.frontier == ('N1',)
        assert first.visited == ()

    def test_snapshot_distances_before_relaxation(self, graph):
        """The snapshot of a selected node shows distances before its edges are relaxed."""
        snapshots = collect_snapshots('dijkstra', graph)
        assert snapshots[1].current == 'N1'
        assert math.isinf(snapshots[1].distances['N4'])
        assert snapshots[2].distances['N4'] == 6
        assert snapshots[2].distances['N2'] == 10

    def test_unreachable_keeps_infinity(self, disconnected_graph):
        snapshots = collect_snapshots('dijkstra', disconnected_graph)
        final = snapshots[-1]
        assert math.isinf(final.distances['N3'])
        assert math.isinf(final.distances['N4'])
        assert list(final.result) == ['N1→N2: N1→N2 (cost: 3)']
        # stops early instead of visiting the unreachable half
        assert set(final.visited) == {'N1', 'N2'}

    def test_no_paths_placeholder(self, empty_graph):
        empty_graph.add_node(100, 100)
        empty_graph.add_node(300, 100)
        final = collect_snapshots('dijkstra', empty_graph)[-1]
        assert list(final.result) == ['No paths found']

    def test_ties_go_to_first_in_insertion_order(self, empty_graph):
        for i in range(3):
            empty_graph.add_node(100 + i * 200, 100)
        empty_graph.add_edge('N1', 'N3', 4)
        empty_graph.add_edge('N1', 'N2', 4)
        snapshots = collect_snapshots('dijkstra', empty_graph)
        assert [s.current for s in snapshots[1:-1]] == ['N1', 'N2', 'N3']

    def test_steps_monotonic(self, graph):
        steps = [s.step for s in collect_snapshots('dijkstra', graph)]
        assert steps == list(range(len(steps)))


class TestPaths:

    def test_shortest_path_walks_back_to_source(self):
        previous = {'A': None, 'B': 'A', 'C': 'B'}
        assert shortest_path(previous, 'A', 'C') == ['A', 'B', 'C']

    def test_path_not_ending_at_source_is_empty(self):
        previous = {'A': None, 'B': None, 'C': 'B'}
        assert shortest_path(previous, 'A', 'C') == []

    def test_cycle_in_predecessors_is_empty(self):
        previous = {'A': None, 'B': 'C', 'C': 'B'}
        assert shortest_path(previous, 'A', 'C') == []

    def test_describe_paths_skips_source(self):
        distances = {'A': 0, 'B': 2}
        previous = {'A': None, 'B': 'A'}
        assert describe_paths(distances, previous, 'A') == ['A→B: A→B (cost: 2)']


class TestRunnerProtocol:

    def test_create_runner_defaults_to_first_node(self, graph):
        runner = create_runner('bfs', graph)
        assert runner.source == 'N1'

    def test_create_runner_with_source(self, graph):
        snapshots = list(create_runner('bfs', graph, 'N3'))
        assert snapshots[-1].result == ('N3', 'N2', 'N4', 'N1')

    def test_unknown_algorithm(self, graph):
        with pytest.raises(UnknownAlgorithmError):
            create_runner('astar', graph)

    def test_empty_graph(self, empty_graph):
        with pytest.raises(EmptyGraphError):
            create_runner('dfs', empty_graph)

    def test_unknown_source(self, graph):
        with pytest.raises(UnknownNodeError):
            DFSRunner(graph, 'N7')

    @pytest.mark.parametrize('algorithm', ['bfs', 'dfs', 'dijkstra'])
    def test_cancel_stops_stepping(self, graph, algorithm):
        runner = create_runner(algorithm, graph)
        runner.next()
        runner.cancel()
        assert runner.status is RunnerStatus.CANCELLED
        assert not runner.has_next()

    @pytest.mark.parametrize('algorithm', ['bfs', 'dfs', 'dijkstra'])
    def test_deterministic(self, graph, algorithm):
        assert collect_snapshots(algorithm, graph) == collect_snapshots(algorithm, graph)

    def test_mutates_shared_state(self, graph):
        state = AlgorithmState()
        runner = BFSRunner(graph, 'N1', state)
        list(runner)
        assert state.algorithm == 'bfs'
        assert state.result == ['N1', 'N2', 'N4', 'N3']

    def test_snapshots_are_immutable(self, graph):
        runner = BFSRunner(graph, 'N1')
        first = runner.next()
        list(runner)
        assert first.result == ('N1',)
        with pytest.raises(AttributeError):
            first.step = 5

    def test_graph_not_modified(self, graph):
        before = (graph.node_ids(), list(graph.edges))
        for algorithm in ('bfs', 'dfs', 'dijkstra'):
            collect_snapshots(algorithm, graph)
        assert (graph.node_ids(), list(graph.edges)) == before
