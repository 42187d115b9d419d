import pytest

from rubylike.rarray import RArray
from rubylike.robject import RObject
from rubylike.rstring import RString


class _Num(RObject):
    def __init__(self, value):
        super().__init__("Integer")
        self.value = value

    def to_string(self):
        return str(self.value)

    def equal(self, other):
        return isinstance(other, _Num) and other.value == self.value


def S(*values):
    return [RString(v) for v in values]


@pytest.fixture
def empty():
    return RArray([])


@pytest.fixture
def strs():
    return RArray(S("a", "b", "c"))


@pytest.fixture
def mixed():
    return RArray([RString("hello"), _Num(42), RString("world")])


def texts(arr):
    return [e.to_string() for e in arr.to_array()]


def test_length_and_size(empty, strs, mixed):
    assert empty.length() == 0
    assert strs.length() == 3
    assert mixed.length() == 3
    assert strs.size() == strs.length()


def test_empty(empty, strs):
    assert empty.empty()
    assert not strs.empty()


def test_first_last(empty, strs, mixed):
    assert strs.first().to_string() == "a"
    assert strs.last().to_string() == "c"
    assert mixed.first().to_string() == "hello"
    assert mixed.last().to_string() == "world"
    assert empty.first() is None
    assert empty.last() is None


def test_get(strs):
    assert strs.get(0).to_string() == "a"
    assert strs.get(1).to_string() == "b"
    assert strs.get(2).to_string() == "c"
    assert strs.get(-1).to_string() == "c"
    assert strs.get(-2).to_string() == "b"
    assert strs.get(10) is None
    assert strs.get(-10) is None


def test_push_pop():
    arr = RArray(S("a"))
    arr.push(RString("b"))
    assert arr.length() == 2
    assert arr.last().to_string() == "b"
    popped = arr.pop()
    assert popped.to_string() == "b"
    assert arr.length() == 1
    assert arr.last().to_string() == "a"
    arr.push(_Num(42))
    assert arr.length() == 2
    assert arr.last().to_string() == "42"
    assert RArray().pop() is None


def test_join(empty, strs, mixed):
    assert strs.join(",").to_string() == "a,b,c"
    assert mixed.join(" ").to_string() == "hello 42 world"
    assert empty.join(",").to_string() == ""
    assert RArray(S("a")).join(",").to_string() == "a"


def test_reverse(empty, strs):
    assert texts(strs.reverse()) == ["c", "b", "a"]
    assert empty.reverse().length() == 0
    assert texts(RArray(S("a")).reverse()) == ["a"]


def test_uniq(empty):
    arr = RArray(S("a", "b", "a", "c", "b"))
    assert texts(arr.uniq()) == ["a", "b", "c"]
    assert empty.uniq().length() == 0
    assert texts(RArray(S("a")).uniq()) == ["a"]


def test_map(strs, empty):
    result = strs.map(lambda o: RString(o.to_string() * 2))
    assert texts(result) == ["aa", "bb", "cc"]
    assert empty.map(lambda o: o).length() == 0


def test_select_reject(mixed, strs, empty):
    is_str = lambda o: isinstance(o, RString)
    assert texts(mixed.select(is_str)) == ["hello", "world"]
    assert texts(mixed.reject(is_str)) == ["42"]
    assert empty.select(lambda o: True).length() == 0
    assert empty.reject(lambda o: True).length() == 0
    assert strs.select(lambda o: False).length() == 0
    assert strs.reject(lambda o: True).length() == 0


def test_include(strs, mixed):
    assert strs.include(RString("a"))
    assert not strs.include(RString("z"))
    assert mixed.include(_Num(42))
    assert not mixed.include(_Num(100))


def test_compact(empty):
    arr = RArray([RString("a"), None, RString("b"), None, RString("c")])
    assert texts(arr.compact()) == ["a", "b", "c"]
    assert empty.compact().length() == 0


def test_flatten():
    arr = RArray([RString("a"), RArray(S("b", "c")), RString("d")])
    assert texts(arr.flatten()) == ["a", "b", "c", "d"]
    nested = RArray(
        [RString("a"), RArray([RString("b"), RArray(S("c", "d"))]), RString("e")]
    )
    assert texts(nested.flatten()) == ["a", "b", "c", "d", "e"]


def test_index_rindex():
    arr = RArray(S("a", "b", "a", "c"))
    assert arr.index(RString("a")) == 0
    assert arr.index(RString("b")) == 1
    assert arr.index(RString("d")) == -1
    assert arr.rindex(RString("a")) == 2
    assert arr.rindex(RString("b")) == 1
    assert arr.rindex(RString("d")) == -1


def test_count():
    arr = RArray(S("a", "b", "a", "c", "a"))
    assert arr.count(RString("a")) == 3
    assert arr.count(RString("b")) == 1
    assert arr.count(RString("d")) == 0


def test_any_all_none():
    arr = RArray([_Num(n) for n in (1, 2, 3, 4)])
    assert arr.any(lambda o: o.value > 3)
    assert arr.all(lambda o: o.value > 0)
    assert arr.none(lambda o: o.value > 5)
    assert not arr.all(lambda o: o.value > 1)


def test_empty_queries(empty):
    assert empty.index(RString("a")) == -1
    assert empty.rindex(RString("a")) == -1
    assert empty.count(RString("a")) == 0
    assert not empty.any(lambda o: True)
    assert empty.all(lambda o: True)
    assert empty.none(lambda o: True)


def test_slice(empty):
    arr = RArray(S("a", "b", "c", "d", "e"))
    assert texts(arr.slice(1, 3)) == ["b", "c"]
    assert texts(arr.slice(-3, -1)) == ["c", "d"]
    assert arr.slice(10, 20).length() == 0
    assert arr.slice(-20, -10).length() == 0
    assert empty.slice(0, 1).length() == 0
    assert empty.slice(-1, 1).length() == 0
    assert texts(arr.slice_from(3)) == ["d", "e"]


def test_take_drop():
    arr = RArray(S("a", "b", "c"))
    assert texts(arr.take(2)) == ["a", "b"]
    assert arr.take(0).length() == 0
    assert texts(arr.take(10)) == ["a", "b", "c"]
    assert texts(arr.drop(1)) == ["b", "c"]
    assert texts(arr.drop(0)) == ["a", "b", "c"]
    assert arr.drop(5).length() == 0


def test_group_by_and_partition():
    arr = RArray([_Num(n) for n in range(1, 6)])
    groups = arr.group_by(lambda o: RString("even" if o.value % 2 == 0 else "odd"))
    assert groups["even"].length() == 2
    assert groups["odd"].length() == 3
    even, odd = arr.partition(lambda o: o.value % 2 == 0)
    assert even.length() == 2
    assert odd.length() == 3


def test_each_and_each_with_index():
    arr = RArray(S("a", "b", "c"))
    seen = []
    arr.each(lambda o: seen.append(o.to_string()))
    assert seen == ["a", "b", "c"]
    indexed = []
    arr.each_with_index(lambda o, i: indexed.append(f"{o.to_string()}:{i}"))
    assert indexed == ["a:0", "b:1", "c:2"]


def test_each_cons_and_slice():
    arr = RArray(S("a", "b", "c", "d"))
    cons = []
    arr.each_cons(2, lambda sub: cons.append(sub.join("").to_string()))
    assert cons == ["ab", "bc", "cd"]
    chunks = []
    arr.each_slice(2, lambda sub: chunks.append(sub.join("").to_string()))
    assert chunks == ["ab", "cd"]
    uneven = []
    RArray(S("a", "b", "c")).each_slice(2, lambda sub: uneven.append(sub.length()))
    assert uneven == [2, 1]


def test_equal(empty):
    arr1 = RArray(S("a", "b"))
    assert arr1.equal(RArray(S("a", "b")))
    assert not arr1.equal(RArray(S("a", "c")))
    assert not arr1.equal(empty)


def test_sort_and_shuffle():
    arr = RArray(S("c", "a", "b"))
    assert texts(arr.sort()) == ["a", "b", "c"]
    shuffled = arr.shuffle()
    assert sorted(texts(shuffled)) == ["a", "b", "c"]
    assert texts(arr) == ["c", "a", "b"]