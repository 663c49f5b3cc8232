import pytest

from sysbits.lists import List, Node, SList


def test_slist_insert_head_reverses_order():
    lst = SList()
    for value in ("a", "b", "c"):
        lst.insert_head(value)
    assert list(lst) == ["c", "b", "a"]
    assert len(lst) == 3
    assert lst.first().value == "c"


def test_slist_insert_after_and_remove_after():
    lst = SList()
    head = lst.insert_head(1)
    lst.insert_after(head, 3)
    lst.insert_after(head, 2)
    assert list(lst) == [1, 2, 3]
    assert lst.remove_after(head) == 2
    assert list(lst) == [1, 3]
    assert len(lst) == 2


def test_slist_remove_head_until_empty():
    lst = SList()
    lst.insert_head("x")
    lst.insert_head("y")
    assert lst.remove_head() == "y"
    assert lst.remove_head() == "x"
    assert lst.first() is None
    with pytest.raises(IndexError):
        lst.remove_head()


def test_slist_remove_arbitrary_node():
    lst = SList()
    last = lst.insert_head("c")
    middle = lst.insert_head("b")
    lst.insert_head("a")
    assert lst.remove(middle) == "b"
    assert list(lst) == ["a", "c"]
    assert lst.remove(last) == "c"
    assert list(lst) == ["a"]


def test_slist_remove_after_tail_raises():
    lst = SList()
    node = lst.insert_head(5)
    with pytest.raises(IndexError):
        lst.remove_after(node)


def test_slist_rejects_foreign_node():
    first, second = SList(), SList()
    node = first.insert_head(1)
    with pytest.raises(ValueError):
        second.remove(node)
    with pytest.raises(ValueError):
        second.insert_after(node, 2)


def test_removed_node_cannot_be_removed_again():
    lst = List()
    node = lst.insert_head(1)
    lst.remove(node)
    with pytest.raises(ValueError):
        lst.remove(node)
    assert len(lst) == 0


def test_list_insert_before_head_and_middle():
    lst = List()
    tail = lst.insert_head("c")
    head = lst.insert_before(tail, "a")
    lst.insert_before(tail, "b")
    assert list(lst) == ["a", "b", "c"]
    assert lst.first() is head
    assert tail.prev.value == "b"


def test_list_insert_after_links_both_ways():
    lst = List()
    a = lst.insert_head("a")
    c = lst.insert_after(a, "c")
    b = lst.insert_after(a, "b")
    assert list(lst) == ["a", "b", "c"]
    assert b.prev is a and b.next is c and c.prev is b


def test_list_remove_head_middle_tail():
    lst = List()
    a = lst.insert_head("a")
    b = lst.insert_after(a, "b")
    c = lst.insert_after(b, "c")
    d = lst.insert_after(c, "d")
    assert lst.remove(b) == "b"
    assert list(lst) == ["a", "c", "d"]
    assert lst.remove(a) == "a"
    assert lst.first() is c and c.prev is None
    assert lst.remove(d) == "d"
    assert list(lst) == ["c"]
    assert c.next is None


def test_list_replace_keeps_position():
    lst = List()
    a = lst.insert_head("a")
    b = lst.insert_after(a, "b")
    lst.insert_after(b, "c")
    fresh = lst.replace(b, "B")
    assert list(lst) == ["a", "B", "c"]
    assert len(lst) == 3
    assert fresh.prev is a
    with pytest.raises(ValueError):
        lst.remove(b)


def test_list_replace_head():
    lst = List()
    a = lst.insert_head("a")
    lst.insert_after(a, "b")
    fresh = lst.replace(a, "z")
    assert lst.first() is fresh
    assert list(lst) == ["z", "b"]


def test_iteration_allows_removal_of_current_node():
    lst = List(range(5))
    for node in lst.nodes():
        if node.value % 2:
            lst.remove(node)
    assert list(lst) == [0, 2, 4]
    assert len(lst) == 3


def test_constructor_preserves_order():
    assert list(SList(["p", "q", "r"])) == ["p", "q", "r"]
    assert list(List(["p", "q", "r"])) == ["p", "q", "r"]


def test_node_repr_shows_value():
    assert repr(Node("v")) == "Node('v')"