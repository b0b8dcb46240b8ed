from core.undo import UndoHistory


def test_undo_history_is_lifo_and_bounded():
    history = UndoHistory(max_depth=2)
    assert history.pop() is None

    history.push([{"id": "1"}])
    history.push([{"id": "2"}])
    history.push([{"id": "3"}])

    assert len(history) == 2
    assert history.pop() == [{"id": "3"}]
    assert history.pop() == [{"id": "2"}]
    assert history.pop() is None


def test_undo_history_clear():
    history = UndoHistory()
    history.push([])
    history.clear()
    assert len(history) == 0
