import random
import suite
from collections import namedtuple
from dgen import from_schema
from lazinq import (
    L, from_iterable, from_producer, from_items, from_range, from_mapping, from_json,
    repeat, empty, generate, Enumerable, OrderedEnumerable, DecodeError, UnsupportedTypeError
)

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

Person = namedtuple('Person', ['name', 'age'])

person_schema = {
    'id': ('pyint', {'min_value': 1, 'max_value': 100}),
    'name': 'word',
    'age': ('pyint', {'min_value': 18, 'max_value': 65}),
    'department': {'_qen_provider': 'choice', 'from': ['eng', 'sales', 'hr']},
}

numbers = L(range(1, 11))  # 1 through 10


class CountingSource:
    """a producer that records how many elements have been pulled from it."""
    def __init__(self, items):
        self.items = list(items)
        self.pulls = 0

    def __call__(self):
        for item in self.items:
            self.pulls += 1
            yield item


# --- factories ---

@test("from_iterable wraps a list without copying and can be drained repeatedly")
def test_from_iterable_restartable():
    data = [1, 2, 3]
    seq = from_iterable(data)
    assert_that(seq.to.list() == [1, 2, 3], "first drain should see the list")
    data.append(4)
    assert_that(seq.to.list() == [1, 2, 3, 4], "view should reflect later changes to the list")
    assert_that(seq.to.list() == [1, 2, 3, 4], "second drain should repeat the elements")


@test("from_iterable over a bare iterator drains only once")
def test_from_iterable_one_shot():
    seq = from_iterable(iter([1, 2, 3]))
    assert_that(seq.to.list() == [1, 2, 3], "first drain yields everything")
    assert_that(seq.to.list() == [], "second drain of a one-shot source yields nothing")


@test("from_producer calls the producer once per drain")
def test_from_producer():
    source = CountingSource([1, 2, 3])
    seq = from_producer(source)
    assert_that(seq.to.list() == [1, 2, 3], "should yield produced items")
    assert_that(seq.to.list() == [1, 2, 3], "a generator function is restartable")
    assert_that(source.pulls == 6, f"two full drains should pull six times, got {source.pulls}")


@test("from_items, from_range, repeat, empty and generate")
def test_simple_factories():
    assert_that(from_items('a', 'b', 'c').to.list() == ['a', 'b', 'c'], "from_items keeps argument order")
    assert_that(from_range(5, 3).to.list() == [5, 6, 7], "from_range counts up from start")
    assert_that(from_range(0, 0).to.list() == [], "zero count is empty")
    assert_that(from_range(0, -4).to.list() == [], "negative count is empty, not an error")
    assert_that(repeat('x', 3).to.list() == ['x', 'x', 'x'], "repeat should repeat")
    assert_that(empty().to.list() == [], "empty should be empty")
    counter = iter(range(100))
    generated = generate(lambda: next(counter), 3)
    assert_that(generated.to.list() == [0, 1, 2], "generate calls the function count times")
    assert_that(generated.to.list() == [3, 4, 5], "generate calls again on the next drain")


@test("from_mapping yields values in mapping order")
def test_from_mapping():
    seq = from_mapping({'key1': 'value1', 'key2': 'value2'})
    assert_that(seq.to.list() == ['value1', 'value2'], "should yield mapping values")


@test("from_json decodes arrays and applies a factory")
def test_from_json():
    assert_that(from_json('[1, 2, 3]').to.list() == [1, 2, 3], "should decode a json array")
    assert_that(from_json(b'["a", "b"]').to.list() == ['a', 'b'], "should accept bytes")
    people = from_json('[{"name": "alice", "age": 25}]', factory=lambda d: Person(**d)).to.list()
    assert_that(people == [Person('alice', 25)], f"factory should build records: {people}")


@test("from_json raises DecodeError for malformed or non-array payloads")
def test_from_json_errors():
    error = assert_raises(DecodeError, lambda: from_json('[1, 2'))
    assert_that(error.__cause__ is not None, "decode error should chain the parser error")
    assert_raises(DecodeError, lambda: from_json('{"a": 1}'))
    assert_raises(ValueError, lambda: from_json('not json'), "DecodeError should also be a ValueError")


@test("from_json raises DecodeError when an element does not fit the factory")
def test_from_json_factory_mismatch():
    payload = '[{"name": "alice", "age": 25, "email": "a@example.com"}]'
    error = assert_raises(DecodeError, lambda: from_json(payload, factory=lambda d: Person(**d)))
    assert_that(isinstance(error.__cause__, TypeError), "should chain the factory's TypeError")
    assert_raises(DecodeError, lambda: from_json('["x"]', factory=int))


@test("to.json and from_json round trip a list of records")
def test_json_round_trip():
    records = [{'name': 'alice', 'age': 25}, {'name': 'bob', 'age': 30}]
    encoded = L(records).to.json()
    assert_that(from_json(encoded).to.list() == records, "records should survive encoding")


# --- laziness and early stop ---

@test("building a chain pulls nothing from the source")
def test_chain_is_lazy():
    source = CountingSource(range(1, 11))
    chain = (from_producer(source)
             .where(lambda x: x % 2 == 0)
             .select(lambda x: x * x)
             .take(3)
             .skip_while(lambda x: x < 0)
             .concat([99])
             .set.distinct())
    assert_that(source.pulls == 0, f"no element should be pulled before a terminal call, got {source.pulls}")
    assert_that(chain.to.list() == [4, 16, 36, 99], "chain should evaluate correctly when drained")


@test("drain stops pulling as soon as the consumer returns False")
def test_drain_early_stop():
    source = CountingSource(range(1, 11))
    seen = []
    from_producer(source).where(lambda x: True).select(lambda x: x * 10).drain(
        lambda x: seen.append(x) and False)
    assert_that(seen == [10], f"consumer should see a single element: {seen}")
    assert_that(source.pulls == 1, f"upstream should be pulled exactly once, got {source.pulls}")


@test("drain visits every element while the consumer returns True")
def test_drain_full():
    seen = []
    numbers.drain(lambda x: seen.append(x) is None)
    assert_that(seen == list(range(1, 11)), "all elements should be pushed in order")


@test("first pulls only up to the first match")
def test_first_is_minimal():
    source = CountingSource(range(1, 11))
    result = from_producer(source).where(lambda x: x > 3).to.first()
    assert_that(result == 4, "first match should be 4")
    assert_that(source.pulls == 4, f"should stop after the fourth pull, got {source.pulls}")


@test("take does not pull past the last taken element")
def test_take_no_overfetch():
    source = CountingSource(range(1, 11))
    assert_that(from_producer(source).take(3).to.list() == [1, 2, 3], "should take three")
    assert_that(source.pulls == 3, f"should pull exactly three, got {source.pulls}")
    source.pulls = 0
    assert_that(from_producer(source).take(0).to.list() == [], "take(0) is empty")
    assert_that(source.pulls == 0, "take(0) should not pull at all")


@test("combinators leave the original sequence untouched")
def test_combinators_do_not_mutate():
    base = L([3, 1, 2])
    base.where(lambda x: x > 1).order_by(lambda x: x).reverse().to.list()
    assert_that(base.to.list() == [3, 1, 2], "source sequence should be unchanged")


# --- where / select / select_many ---

@test("where then select over 1..10 yields even squares")
def test_where_select_scenario():
    result = numbers.where(lambda x: x % 2 == 0).select(lambda x: x * x).to.list()
    assert_that(result == [4, 16, 36, 64, 100], f"unexpected result: {result}")


@test("where preserves relative order of generated records")
def test_where_generated_records():
    people = from_schema(person_schema, seed=42).take(30)
    all_people = people.to.list()
    eng = people.where(lambda p: p['department'] == 'eng').to.list()
    expected = [p for p in all_people if p['department'] == 'eng']
    assert_that(eng == expected, "where should keep survivors in source order")


@test("select can change the element type")
def test_select_type_change():
    assert_that(numbers.take(3).select(str).to.list() == ['1', '2', '3'], "should map ints to strings")


@test("select_with_index passes the position")
def test_select_with_index():
    result = L(['a', 'b']).select_with_index(lambda x, i: f"{i}:{x}").to.list()
    assert_that(result == ['0:a', '1:b'], f"unexpected result: {result}")


@test("select_many drains each sub-sequence in turn")
def test_select_many():
    sentences = L(['hello world', 'lazy linq'])
    assert_that(sentences.select_many(str.split).to.list() == ['hello', 'world', 'lazy', 'linq'],
                "should flatten split words")
    nested = L([L([1, 2]), L([]), L([3])])
    assert_that(nested.select_many(lambda s: s).to.list() == [1, 2, 3], "sub-sequences may be enumerables")


@test("select_many stops inside a sub-sequence on early stop")
def test_select_many_early_stop():
    inner = CountingSource([1, 2, 3])
    result = L([0, 1]).select_many(lambda _: from_producer(inner)).take(2).to.list()
    assert_that(result == [1, 2], "should take from the first sub-sequence")
    assert_that(inner.pulls == 2, f"inner producer should be pulled twice, got {inner.pulls}")


@test("flatten concatenates nested sequences")
def test_flatten():
    result = L([[1, 2, 3], [], [4, 5, 6], [7, 8, 9]]).flatten().to.list()
    assert_that(result == [1, 2, 3, 4, 5, 6, 7, 8, 9], f"unexpected result: {result}")
    assert_that(L([]).flatten().to.list() == [], "flattening nothing is empty")


@test("of_type filters by type")
def test_of_type():
    assert_that(L([1, 'a', 2.5, 'b']).of_type(str).to.list() == ['a', 'b'], "should keep strings")


# --- concat / append / prepend / default_if_empty ---

@test("concat, append and prepend keep order")
def test_concat_append_prepend():
    assert_that(L([1, 2]).concat(L([3, 4])).to.list() == [1, 2, 3, 4], "concat")
    assert_that(L([1, 2]).concat([]).to.list() == [1, 2], "concat with empty")
    assert_that(L([1, 2]).append(3).to.list() == [1, 2, 3], "append")
    assert_that(L([1, 2]).prepend(0).to.list() == [0, 1, 2], "prepend")
    assert_that(empty().append(1).prepend(0).to.list() == [0, 1], "append/prepend on empty")


@test("concat stops before the second sequence on early stop")
def test_concat_early_stop():
    second = CountingSource([3, 4])
    result = L([1, 2]).concat(from_producer(second)).take(2).to.list()
    assert_that(result == [1, 2], "should take from the first sequence only")
    assert_that(second.pulls == 0, "second sequence should not be touched")


@test("default_if_empty only fills empty sequences")
def test_default_if_empty():
    assert_that(empty().default_if_empty(0).to.list() == [0], "empty gets the default")
    assert_that(L([5]).default_if_empty(0).to.list() == [5], "non-empty is unchanged")


# --- take / skip family ---

@test("take and skip handle bounds")
def test_take_skip_bounds():
    assert_that(numbers.take(3).to.list() == [1, 2, 3], "take 3")
    assert_that(numbers.take(50).to.list() == list(range(1, 11)), "take more than available")
    assert_that(numbers.take(-1).to.list() == [], "negative take is empty")
    assert_that(numbers.skip(8).to.list() == [9, 10], "skip 8")
    assert_that(numbers.skip(50).to.list() == [], "skip everything")
    assert_that(numbers.skip(-2).to.list() == list(range(1, 11)), "negative skip skips nothing")


@test("concat(take(n), skip(n)) reproduces the sequence")
def test_take_skip_complement():
    data = list(range(7))
    for n in range(len(data) + 1):
        rebuilt = L(data).take(n).concat(L(data).skip(n)).to.list()
        assert_that(rebuilt == data, f"complementarity failed for n={n}: {rebuilt}")


@test("take_while and take_until exclude the triggering element")
def test_take_while_until():
    data = L([1, 2, 3, 4, 1])
    assert_that(data.take_while(lambda x: x < 3).to.list() == [1, 2], "take_while")
    assert_that(data.take_until(lambda x: x == 3).to.list() == [1, 2], "take_until")
    assert_that(data.take_while(lambda x: x > 10).to.list() == [], "take_while failing at once")
    assert_that(data.take_until(lambda x: x > 10).to.list() == [1, 2, 3, 4, 1], "take_until never true")


@test("take_until stops pulling at the triggering element")
def test_take_until_no_overfetch():
    source = CountingSource([1, 2, 3, 4, 5])
    from_producer(source).take_until(lambda x: x == 2).to.list()
    assert_that(source.pulls == 2, f"should stop at the trigger, got {source.pulls}")


@test("skip_while and skip_until never re-evaluate after the transition")
def test_skip_while_until():
    data = L([1, 2, 5, 1, 2])
    assert_that(data.skip_while(lambda x: x < 3).to.list() == [5, 1, 2], "skip_while")
    assert_that(data.skip_until(lambda x: x == 5).to.list() == [5, 1, 2], "skip_until keeps the trigger")
    assert_that(data.skip_until(lambda x: x > 10).to.list() == [], "skip_until never true skips all")
    assert_that(data.skip_while(lambda x: x > 10).to.list() == [1, 2, 5, 1, 2], "skip_while false at once")


@test("take_last and skip_last work from the end")
def test_take_skip_last():
    assert_that(numbers.take_last(3).to.list() == [8, 9, 10], "take_last 3")
    assert_that(numbers.take_last(0).to.list() == [], "take_last 0")
    assert_that(numbers.take_last(20).to.list() == list(range(1, 11)), "take_last beyond length is all")
    assert_that(numbers.skip_last(3).to.list() == list(range(1, 8)), "skip_last 3")
    assert_that(numbers.skip_last(20).to.list() == [], "skip_last beyond length is empty")
    assert_that(numbers.skip_last(0).to.list() == list(range(1, 11)), "skip_last 0 is all")


@test("take_last and skip_last reject negative counts")
def test_take_skip_last_negative():
    assert_raises(ValueError, lambda: numbers.take_last(-1))
    assert_raises(ValueError, lambda: numbers.skip_last(-1))


# --- ordering ---

@test("order_by sorts people by age")
def test_order_by_scenario():
    people = L([Person('Bob', 30), Person('Alice', 25), Person('Charlie', 35)])
    ordered = people.order_by(lambda p: p.age, ascending=True)
    assert_that(isinstance(ordered, OrderedEnumerable), "order_by should return an OrderedEnumerable")
    names = ordered.select(lambda p: p.name).to.list()
    assert_that(names == ['Alice', 'Bob', 'Charlie'], f"unexpected order: {names}")
    desc = people.order_by(lambda p: p.age, ascending=False).select(lambda p: p.name).to.list()
    assert_that(desc == ['Charlie', 'Bob', 'Alice'], f"unexpected descending order: {desc}")


@test("order_by is stable in both directions")
def test_order_by_stable():
    data = L([('a', 1), ('b', 0), ('c', 1), ('d', 0)])
    asc = data.order_by(lambda x: x[1]).select(lambda x: x[0]).to.list()
    desc = data.order_by_descending(lambda x: x[1]).select(lambda x: x[0]).to.list()
    assert_that(asc == ['b', 'd', 'a', 'c'], f"ascending should keep ties in source order: {asc}")
    assert_that(desc == ['a', 'c', 'b', 'd'], f"descending should keep ties in source order: {desc}")


@test("order_by compares strings and floats naturally")
def test_order_by_key_types():
    assert_that(L(['pear', 'Apple', 'apple']).order_by(lambda s: s).to.list() == ['Apple', 'apple', 'pear'],
                "strings sort by code point")
    assert_that(L([2.5, -1.0, 0.1]).order_by(lambda x: x).to.list() == [-1.0, 0.1, 2.5], "floats sort numerically")


@test("then_by adds secondary keys")
def test_then_by():
    people = L([Person('b', 30), Person('a', 30), Person('c', 25)])
    result = people.order_by(lambda p: p.age).then_by(lambda p: p.name).select(lambda p: p.name).to.list()
    assert_that(result == ['c', 'a', 'b'], f"unexpected then_by order: {result}")
    result = people.order_by(lambda p: p.age).then_by_descending(lambda p: p.name).select(lambda p: p.name).to.list()
    assert_that(result == ['c', 'b', 'a'], f"unexpected then_by_descending order: {result}")


@test("order_by accepts a comparer for custom key ordering")
def test_order_by_comparer():
    by_length = lambda a, b: len(a) - len(b)
    result = L(['ccc', 'a', 'bb']).order_by(lambda s: s, comparer=by_length).to.list()
    assert_that(result == ['a', 'bb', 'ccc'], f"comparer should drive the sort: {result}")


@test("order_by raises UnsupportedTypeError for incomparable keys")
def test_order_by_incomparable():
    mixed = L([1, 'a', 2]).order_by(lambda x: x)
    error = assert_raises(UnsupportedTypeError, mixed.to.list)
    assert_that(isinstance(error, TypeError), "should also be a TypeError")


@test("order_by is lazy until drained")
def test_order_by_lazy():
    source = CountingSource([3, 1, 2])
    ordered = from_producer(source).order_by(lambda x: x)
    assert_that(source.pulls == 0, "sorting should wait for a drain")
    assert_that(ordered.to.first() == 1, "first of sorted should be 1")


# --- reverse / shuffle ---

@test("reverse inverts order")
def test_reverse():
    assert_that(L([1, 2, 3]).reverse().to.list() == [3, 2, 1], "reverse")
    assert_that(empty().reverse().to.list() == [], "reverse of empty")


@test("shuffle permutes with an injected random source")
def test_shuffle():
    data = list(range(20))
    shuffled = L(data).shuffle(random.Random(7)).to.list()
    assert_that(sorted(shuffled) == data, "shuffle should keep every element")
    assert_that(shuffled != data, "a seeded shuffle of 20 elements should change the order")
    again = L(data).shuffle(random.Random(7)).to.list()
    assert_that(shuffled == again, "same seed should give the same permutation")
    assert_that(L(['a']).shuffle().to.list() == ['a'], "single element is unchanged")
    assert_that(empty().shuffle().to.list() == [], "empty stays empty")


if __name__ == "__main__":
    suite.run(title="lazinq core operations test suite")
