# goodbad

Sort values into *good* and *bad* cases, then take the good value out or
step away from everything else: return early from a function, break out
of a loop, skip to the next item, or fall back to a replacement value.

The package has four modules:

- `goodbad.bits`: `pack_bools` and `bit_at`, the packed flag sets that
  record which variants are good and which are bad.
- `goodbad.core`: the `GoodBad` base and the built-in value families.
- `goodbad.derive`: declaring your own enums with good and bad variants.
- `goodbad.flow`: the short-circuit helpers.

## Installing

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Built-in values

`goodbad.core` provides three families, each with one good and one bad
variant:

| good          | bad          |
|---------------|--------------|
| `Ok(v)`       | `Err(e)`     |
| `Some(v)`     | `Nothing()`  |
| `Continue(v)` | `Break(b)`   |

`Nothing()` carries `()` as its inner value; `Continue()` and `Break()`
default to `()` as well.

Every `GoodBad` value has:

- `is_good()` / `is_bad()`: whether the current variant is marked so;
- `good()`: `Ok(inner)` for a good variant, otherwise `Err(self)`;
- `bad()`: `Err(inner)` for a bad variant, otherwise `Ok(self)`;
- `two_states()`: `Ok(good inner)` or `Err(bad inner)`. It only works for
  types with exactly one good and one bad variant; other types raise
  `TwoStatesError`.

```python
from goodbad.core import Ok, Err, Some

Ok(2).good()          # Ok(2)
Err("boom").good()    # Err(Err('boom'))
Err("boom").is_bad()  # True
Err("boom").two_states()  # Err('boom')
```

`from_good(cls, value)`, `from_bad(cls, value)`, `into_good(value, cls)`
and `into_bad(value, cls)` build a value of `cls` from its inner payload:

```python
from goodbad.core import Some, Ok, into_good, from_bad, Nothing

into_good(1, Some)    # Some(1)
into_good(2, Ok)      # Ok(2)
from_bad(Some, ())    # Nothing()
```

## Propagating from functions and loops

`goodbad.flow` holds the short-circuit forms. Decorate a function with
`propagating` so that the helpers can return early from it:

```python
from goodbad.core import Ok, Err
from goodbad.flow import propagating, good

@propagating
def double(res):
    value = good(res)   # on Err, the function returns that Err at once
    return Ok(value * 2)

double(Ok(4))       # Ok(8)
double(Err("no"))   # Err('no')
```

`loop(iterable)` runs a body over each item and honours break and
continue signals. Used as a decorator, the decorated name is bound to the
loop's result: the value of the `LoopBreak` that stopped it, or `None`
when the items ran out.

```python
from goodbad.core import Ok, Err
from goodbad.flow import loop, good, LoopContinue, LoopBreak

collected = []

@loop([Ok(1), Err("x"), Ok(3)])
def result(item):
    collected.append(good(item, LoopContinue()))

# collected == [1, 3], result is None

@loop([Ok(1), Err("x"), Ok(3)])
def first_error(item):
    good(item, LoopBreak("stopped"))

# first_error == "stopped"
```

### The fallback argument

Each helper takes an optional `fallback` that decides what happens when
the value is not kept:

- omitted: raise `EarlyReturn` with the dropped value, so the enclosing
  `propagating` function returns it;
- a `ShortCircuit` instance (`EarlyReturn(x)`, `LoopBreak(x)`,
  `LoopContinue()`): raise it;
- a callable: call it with the dropped value; if it returns a
  `ShortCircuit`, raise that, otherwise use its result as the value;
- anything else: use it as the value.

For `good` and `bad`, a callable fallback with `full=False` needs a type
with exactly one good and one bad variant, and receives the other side's
inner value; with `full=True` it receives the whole value instead.

```python
from goodbad.core import Err, Some, Nothing
from goodbad.flow import good

good(Err("12"), lambda e: int(e))            # 12
good(Nothing(), 10)                          # 10
good(Err("x"), lambda whole: repr(whole), full=True)  # "Err(value='x')"
```

### The helpers

- `good(value, fallback, full)` / `bad(value, fallback, full)`: return the
  inner value of a good (bad) variant, otherwise propagate.
- `take(value, variant, fallback)`: return the fields of `variant` if
  `value` is one (`()` for a unit variant, the field for one field, a
  tuple for several), otherwise propagate `value` itself.
- `reject(value, variant, fallback)`: propagate the fields of `variant`
  if `value` is one, otherwise return `value`.
- `reject_good(value, fallback)` / `reject_bad(value, fallback)`:
  propagate the inner value of a good (bad) variant, otherwise return
  `value`.
- `is_good(value)` / `is_bad(value)`: plain checks.

`variant` may be a variant class or the instance of a unit variant.
Passing anything that is not a `GoodBad` value raises `TypeError`.

## Your own enums

Subclass `PropagateEnum`, declare variants with `variant(...)`, and apply
`derive`. Positional arguments to `variant` are field types; a tuple of
types stands for a single tuple-typed field; `named=` gives struct-like
fields, as a mapping of names to types or as names alone. Mark variants
with `good=True` or `bad=True`.

```python
from goodbad.derive import PropagateEnum, variant, derive
from goodbad.core import from_good
from goodbad.flow import good, take

@derive
class Log(PropagateEnum):
    Empty = variant()
    Success = variant(str, good=True)
    Info = variant(str)
    Code = variant(int, bad=True)
    Message = variant(str, bad=True)
    Tagged = variant(named={"id": int})

Log.Success("done").is_good()      # True
good(Log.Success("done"))          # "done"
Log.Code(2).bad()                  # Err(2)
take(Log.Info("hi"), Log.Info)     # "hi"
from_good(Log, "made")             # Success('made')
Log.Tagged(id=7).id                # 7
Log.Empty                          # unit variants are ready-made instances
```

Variant instances are immutable, compare by variant and fields, and check
their field types when built. `from_good` / `from_bad` only build a value
when exactly one good (bad) variant has a matching shape.

`derive` raises `DeriveError` when:

- the class is not a `PropagateEnum` subclass;
- it declares no variants;
- no variant is marked good or bad;
- a named variant is marked good or bad;
- two good (or two bad) variants are ambiguous between one tuple-typed
  field and several fields of the same types, such as `variant(int, int)`
  and `variant((int, int))`.

An enum with exactly two variants, one good and one bad, supports
`two_states()` and the non-`full` callable fallbacks.