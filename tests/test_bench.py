from tools.bench import POSITIONS, run_position, setup


def test_benchmark_positions_are_playable():
    for _, moves in POSITIONS:
        board = setup(moves)
        assert board.move_count == len(moves)
        assert not board.is_game_over()


def test_run_position_compares_pruned_and_full_search():
    label, moves = POSITIONS[1]
    result = run_position(label, moves)
    assert result["label"] == label
    assert result["agree"]
    assert result["nodes"] <= result["full_nodes"]
