import itertools

import pytest

from goodbad.core import Break, Continue, Err, Nothing, Ok, Some, TwoStatesError
from goodbad.derive import PropagateEnum, derive, variant
from goodbad.flow import (
    EarlyReturn,
    LoopBreak,
    LoopContinue,
    bad,
    good,
    is_bad,
    is_good,
    loop,
    propagating,
    reject,
    reject_bad,
    reject_good,
    take,
)


@derive
class MyEnum(PropagateEnum):
    Zero = variant(good=True)
    One = variant(int, good=True)
    OverloadOne = variant(int, good=True)
    Two = variant(int, int, good=True)
    Three = variant(int, int, int)
    Named = variant(named={"id": int})


@derive
class LogData(PropagateEnum):
    SuccessMsg = variant(str, good=True)
    InfoMsg = variant(str)
    DebugMsg = variant(str)
    ErrorCode = variant(int, bad=True)
    ErrorMsg = variant(str, bad=True)


def outcome(call):
    try:
        return ("value", call())
    except EarlyReturn as signal:
        return ("return", signal.value)
    except LoopBreak as signal:
        return ("break", signal.value)
    except LoopContinue:
        return ("continue", None)


def bail(message):
    raise RuntimeError(message)


# Good value or return the value itself


@pytest.mark.parametrize(
    "value, expected",
    [
        (Some(1), ("value", 1)),
        (Nothing(), ("return", Nothing())),
        (Ok(2), ("value", 2)),
        (Err("error"), ("return", Err("error"))),
        (Continue(3), ("value", 3)),
        (Break("break"), ("return", Break("break"))),
        (MyEnum.Zero, ("value", ())),
        (MyEnum.One(1), ("value", 1)),
        (MyEnum.OverloadOne(1), ("value", 1)),
        (MyEnum.Two(2, 4), ("value", (2, 4))),
        (MyEnum.Three(3, 6, 9), ("return", MyEnum.Three(3, 6, 9))),
    ],
)
def test_good_value_or_return_self(value, expected):
    assert outcome(lambda: good(value)) == expected


def test_good_value_or_return_default_value():
    assert outcome(lambda: good(Some(1), EarlyReturn())) == ("value", 1)
    assert outcome(lambda: good(Nothing(), EarlyReturn())) == ("return", ())
    assert outcome(lambda: good(Ok(2), EarlyReturn())) == ("value", 2)
    assert outcome(lambda: good(Err("error"), EarlyReturn())) == ("return", ())
    fallback = EarlyReturn("default value")
    assert outcome(lambda: good(Continue(3), fallback)) == ("value", 3)
    assert outcome(lambda: good(Break("break"), fallback)) == ("return", "default value")


def test_good_value_or_use_default_value():
    assert good(Some(1), 10) == 1
    assert good(Nothing(), 10) == 10
    assert good(Some(1), 0) == 1
    assert good(Nothing(), 0) == 0


def test_good_value_or_continue():
    assert outcome(lambda: good(Ok(2), LoopContinue())) == ("value", 2)
    assert outcome(lambda: good(Err("error"), LoopContinue())) == ("continue", None)


def test_good_value_or_break():
    assert outcome(lambda: good(Ok(1), LoopBreak())) == ("value", 1)
    assert outcome(lambda: good(Err("error"), LoopBreak())) == ("break", ())
    assert outcome(lambda: good(Some(2), LoopBreak("break"))) == ("value", 2)
    assert outcome(lambda: good(Nothing(), LoopBreak("break"))) == ("break", "break")


def test_good_value_or_apply_closure_not_two_states():
    def is_one(enum_):
        return LoopBreak(isinstance(enum_, MyEnum.One))

    assert outcome(lambda: good(MyEnum.Zero, is_one, full=True)) == ("value", ())
    assert outcome(lambda: good(MyEnum.Three(1, 2, 3), is_one, full=True)) == (
        "break",
        False,
    )

    flags = []

    def mark(_):
        flags.append(True)
        return EarlyReturn(4)

    assert outcome(lambda: good(MyEnum.Named(id=0), mark, full=True)) == ("return", 4)
    assert flags == [True]


def test_good_value_or_apply_closure_two_states():
    assert outcome(lambda: good(Err("error"), lambda err: EarlyReturn(err))) == (
        "return",
        "error",
    )
    assert outcome(lambda: good(Err("error"), EarlyReturn)) == ("return", "error")
    assert good(Err("12"), lambda err: int(err)) == 12
    assert outcome(lambda: good(Err("error"), lambda err: EarlyReturn(err[0]))) == (
        "return",
        "e",
    )
    assert outcome(lambda: good(Err("error"), lambda err: LoopBreak(err[:3]))) == (
        "break",
        "err",
    )


def test_closure_without_full_needs_two_states():
    with pytest.raises(TwoStatesError):
        good(MyEnum.Three(1, 2, 3), lambda v: v)


def test_continue_class_as_closure_is_rejected():
    with pytest.raises(TypeError):
        good(Err("x"), LoopContinue)


def test_non_goodbad_value_is_rejected():
    with pytest.raises(TypeError):
        good(5)


# Scenarios with a log enum


@propagating
def append_party_emoji_on_success(log_data):
    success_msg = good(log_data)
    return LogData.SuccessMsg(success_msg + " 🎉🎉🎉")


@propagating
def get_success_msg_len_or_format_str(log_data):
    success_msg = good(log_data, lambda data: EarlyReturn(Err(repr(data))), full=True)
    return Ok(len(success_msg))


@propagating
def reset_error_code_on_error(log_data):
    take(log_data, LogData.ErrorCode, EarlyReturn(log_data))
    return LogData.ErrorCode(0)


def test_append_party_emoji():
    log = LogData.SuccessMsg("This is a success message")
    assert append_party_emoji_on_success(log) == LogData.SuccessMsg(
        "This is a success message 🎉🎉🎉"
    )
    err = LogData.ErrorMsg("This is an error message")
    assert append_party_emoji_on_success(err) == LogData.ErrorMsg(
        "This is an error message"
    )


def test_reset_error_code():
    assert reset_error_code_on_error(LogData.ErrorCode(2)) == LogData.ErrorCode(0)
    msg = LogData.ErrorMsg("kept")
    assert reset_error_code_on_error(msg) == msg


def test_success_msg_len_or_format():
    info = LogData.InfoMsg("This is an info message")
    res = get_success_msg_len_or_format_str(info)
    assert res != Ok(23)
    assert res == Err("InfoMsg('This is an info message')")
    assert get_success_msg_len_or_format_str(LogData.SuccessMsg("abc")) == Ok(3)


# Loops


def test_loop_continue_doubles_good_items():
    items = [Ok(1), Ok(2), Ok(3), Err("four"), Ok(5)]
    doubled = []

    def body(item):
        doubled.append(good(item, LoopContinue()) * 2)

    result = loop(items)(body)

    assert result is None
    assert doubled == [2, 4, 6, 10]
    assert good(items[4], LoopContinue()) == 5
    assert outcome(lambda: good(items[3], LoopContinue())) == ("continue", None)


def test_loop_break_with_value():
    def body(_):
        good(Nothing(), LoopBreak(123))

    value = loop(itertools.count())(body)

    assert value == 123


def test_loop_do_closure_then_continue_or_break():
    items = [Ok(1), Ok(2), Err("three"), Ok(4), Ok(5)]
    seen = []
    err_items = []

    def record(signal):
        def closure(item):
            err_items.append(item)
            return signal

        return closure

    @loop(items)
    def _(item):
        seen.append(good(item, record(LoopContinue()), full=True))

    assert seen == [1, 2, 4, 5]
    assert err_items == [Err("three")]

    seen.clear()
    err_items.clear()

    @loop(items)
    def stopped(item):
        seen.append(good(item, record(LoopBreak()), full=True))

    assert seen == [1, 2]
    assert err_items == [Err("three")]
    assert stopped == ()


def test_loop_break_with_closure_result():
    good_values = []

    def body(_):
        inner = good(
            Err("an error"), lambda v: LoopBreak(isinstance(v, Ok)), full=True
        )
        good_values.append(inner)

    got_a_good_value = loop(itertools.count())(body)

    assert got_a_good_value is False
    assert good_values == []


def test_loop_exhausted_returns_none():
    visited = []

    def body(item):
        visited.append(good(item, LoopBreak("stop")))

    result = loop([Ok(1), Ok(2)])(body)

    assert result is None
    assert visited == [1, 2]


# Propagating functions


def test_propagating_returns_early_value():
    @propagating
    def first_or_marker(value):
        inner = good(value, EarlyReturn("marker"))
        return inner + 1

    assert first_or_marker(Some(1)) == 2
    assert first_or_marker(Nothing()) == "marker"


def test_propagating_lets_loop_signals_through():
    def breaker():
        good(Nothing(), LoopBreak(7))

    wrapped = propagating(breaker)

    assert outcome(wrapped) == ("break", 7)


def test_early_return_escapes_without_propagating():
    with pytest.raises(EarlyReturn) as info:
        good(Err("e"))
    assert info.value.value == Err("e")


# Errors raised from fallbacks


def test_closure_raising_error():
    assert good(MyEnum.Two(0, 1), lambda v: bail(f"Cannot get good value! {v!r}"), full=True) == (0, 1)
    with pytest.raises(RuntimeError, match="'some error'"):
        good(Err("some error"), lambda v: bail(repr(v)))


def test_take_with_raising_fallback():
    with pytest.raises(RuntimeError, match="Cannot get two!"):
        take(MyEnum.Three(0, 0, 0), MyEnum.Two, lambda _: bail("Cannot get two!"))


# take and reject


def test_take_variants():
    assert take(MyEnum.Two(1, 2), MyEnum.Two) == (1, 2)
    assert take(MyEnum.One(5), MyEnum.One) == 5
    assert take(MyEnum.Zero, MyEnum.Zero) == ()
    assert outcome(lambda: take(MyEnum.One(1), MyEnum.Zero)) == ("return", MyEnum.One(1))
    assert take(MyEnum.Three(1, 2, 3), MyEnum.Two, (0, 0)) == (0, 0)


def test_reject():
    assert reject(Err(32), Err, Err) == Err(32)
    assert reject(Ok(1), Err) == Ok(1)
    assert outcome(lambda: reject(Err(32), Err)) == ("return", 32)
    assert outcome(lambda: reject(MyEnum.Zero, MyEnum.Zero, LoopContinue())) == (
        "continue",
        None,
    )


def test_reject_good():
    three = MyEnum.Three(1, 2, 3)
    assert reject_good(three, EarlyReturn()) == three
    assert outcome(lambda: reject_good(MyEnum.One(4))) == ("return", 4)
    assert outcome(lambda: reject_good(Ok(3), lambda v: LoopBreak(v * 2))) == ("break", 6)


def test_reject_bad():
    assert reject_bad(Ok(1)) == Ok(1)
    assert outcome(lambda: reject_bad(Err("e"))) == ("return", "e")
    assert outcome(lambda: reject_bad(LogData.ErrorCode(2), LoopContinue())) == (
        "continue",
        None,
    )


def test_bad_value_and_closure():
    assert bad(Err("oops")) == "oops"
    assert outcome(lambda: bad(Ok("always ok"), lambda v: EarlyReturn(len(v)))) == (
        "return",
        9,
    )
    assert bad(LogData.ErrorCode(3)) == 3
    assert outcome(lambda: bad(LogData.InfoMsg("i"))) == ("return", LogData.InfoMsg("i"))


def test_good_on_options_with_defaults():
    assert outcome(lambda: good(Some(8), EarlyReturn())) == ("value", 8)
    assert good(Some(9), 0) == 9


def test_is_good_and_is_bad():
    assert is_good(MyEnum.Zero) is True
    assert is_good(MyEnum.Three(1, 2, 3)) is False
    assert is_bad(LogData.ErrorMsg("x")) is True
    assert is_bad(LogData.DebugMsg("x")) is False
    assert is_bad(Nothing()) is True
    with pytest.raises(TypeError):
        is_good(None)