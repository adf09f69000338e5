from rsdrav.focus import ComponentId, FocusManager


def ids(*values):
    return [ComponentId(v) for v in values]


def test_focus_manager_creation():
    mgr = FocusManager()
    assert mgr.current is None
    assert mgr.count() == 0


def test_register_component():
    mgr = FocusManager()
    cid = ComponentId(1)
    mgr.register(cid, 0, True)
    assert mgr.count() == 1
    assert mgr.current == cid


def test_focus_next():
    mgr = FocusManager()
    id1, id2, id3 = ids(1, 2, 3)
    mgr.register(id1, 0, True)
    mgr.register(id2, 1, True)
    mgr.register(id3, 2, True)
    assert mgr.current == id1
    mgr.focus_next()
    assert mgr.current == id2
    mgr.focus_next()
    assert mgr.current == id3
    mgr.focus_next()
    assert mgr.current == id1


def test_focus_prev():
    mgr = FocusManager()
    id1, id2, id3 = ids(1, 2, 3)
    mgr.register(id1, 0, True)
    mgr.register(id2, 1, True)
    mgr.register(id3, 2, True)
    assert mgr.current == id1
    mgr.focus_prev()
    assert mgr.current == id3
    mgr.focus_prev()
    assert mgr.current == id2
    mgr.focus_prev()
    assert mgr.current == id1


def test_skip_non_focusable():
    mgr = FocusManager()
    id1, id2, id3 = ids(1, 2, 3)
    mgr.register(id1, 0, True)
    mgr.register(id2, 1, False)
    mgr.register(id3, 2, True)
    assert mgr.current == id1
    mgr.focus_next()
    assert mgr.current == id3
    mgr.focus_prev()
    assert mgr.current == id1
    assert mgr.focusable_count() == 2


def test_explicit_focus():
    mgr = FocusManager()
    id1, id2 = ids(1, 2)
    mgr.register(id1, 0, True)
    mgr.register(id2, 1, True)
    assert mgr.focus(id2) is True
    assert mgr.current == id2


def test_focus_refused_for_unknown_or_unfocusable():
    mgr = FocusManager()
    id1, id2 = ids(1, 2)
    mgr.register(id1, 0, True)
    mgr.register(id2, 1, False)
    assert mgr.focus(id2) is False
    assert mgr.focus(ComponentId(99)) is False
    assert mgr.current == id1


def test_unregister():
    mgr = FocusManager()
    id1, id2 = ids(1, 2)
    mgr.register(id1, 0, True)
    mgr.register(id2, 1, True)
    mgr.focus(id1)
    mgr.unregister(id1)
    assert mgr.count() == 1
    assert mgr.current == id2


def test_unregister_last_leaves_no_focus():
    mgr = FocusManager()
    cid = ComponentId(1)
    mgr.register(cid, 0, True)
    mgr.unregister(cid)
    assert mgr.current is None
    assert mgr.count() == 0


def test_is_focused():
    mgr = FocusManager()
    id1, id2 = ids(1, 2)
    mgr.register(id1, 0, True)
    mgr.register(id2, 1, True)
    assert mgr.is_focused(id1)
    assert not mgr.is_focused(id2)
    mgr.focus_next()
    assert not mgr.is_focused(id1)
    assert mgr.is_focused(id2)


def test_tab_order_respected():
    mgr = FocusManager()
    id1, id2, id3 = ids(1, 2, 3)
    mgr.register(id3, 2, True)
    mgr.register(id1, 0, True)
    mgr.register(id2, 1, True)
    assert mgr.current == id3
    mgr.focus(id1)
    assert mgr.current == id1
    mgr.focus_next()
    assert mgr.current == id2
    mgr.focus_next()
    assert mgr.current == id3


def test_reregister_replaces_entry():
    mgr = FocusManager()
    cid = ComponentId(1)
    mgr.register(cid, 0, True)
    mgr.register(cid, 5, False)
    assert mgr.count() == 1
    assert mgr.focusable_count() == 0


def test_clear():
    mgr = FocusManager()
    cid = ComponentId(1)
    mgr.register(cid, 0, True)
    assert mgr.current == cid
    mgr.clear()
    assert mgr.current is None
    assert mgr.count() == 1


def test_clear_all():
    mgr = FocusManager()
    mgr.register(ComponentId(1), 0, True)
    mgr.register(ComponentId(2), 1, True)
    mgr.clear_all()
    assert mgr.count() == 0
    assert mgr.current is None
    assert mgr.focus_next() is False
    assert mgr.focus_prev() is False


def test_no_focusable_components():
    mgr = FocusManager()
    mgr.register(ComponentId(1), 0, False)
    assert mgr.current is None
    assert mgr.focus_next() is False
    assert mgr.focus_prev() is False


def test_new_id():
    mgr = FocusManager()
    id1 = mgr.new_id()
    id2 = mgr.new_id()
    id3 = mgr.new_id()
    assert len({id1, id2, id3}) == 3
    assert id1 == ComponentId(1)