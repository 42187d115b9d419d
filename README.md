# rubylike

Value types and a small class system that behave like their Ruby counterparts.

## What is inside

- `rubylike.rstring.RString`: an immutable string with `capitalize`, `swap_case`,
  `gsub`, `sub`, `center`, `ljust`, `rjust`, `to_camel_case`, `to_snake_case` and
  more. Lengths, indexes and slices count characters. `gsub` and `sub` accept
  `$1`, `${name}` and `$$` in the replacement; an invalid pattern leaves the
  string unchanged.
- `rubylike.rinteger.RInteger`: an immutable integer with arithmetic that
  divides toward zero, bit operations, `gcd`/`lcm`, rounding to a negative
  precision, base conversion (`to_hex`, `to_oct`, `to_bin`, `to_base`),
  `digits`, `times`, `up_to` and `down_to`.
- `rubylike.rarray.RArray`: an ordered list with `map`, `select`, `reject`,
  `uniq`, `sort`, `flatten`, `compact`, `group_by`, `partition`, `each_cons`,
  `each_slice` and the rest. `get` and `slice` take negative indexes.
- `rubylike.rhash.RHash`: a mutable table whose `keys` returns the text form of
  each key, sorted, and which exports to JSON, YAML, XML, HTML, CSV and TSV.
- `rubylike.rclass.RClass` (created with `new_class`): Ruby-style classes with
  inheritance, `super`, `attr_accessor`/`attr_reader`/`attr_writer`,
  `method_missing`, aliases, `before` and `after` hooks, singleton (eigen)
  methods, a method lookup cache and optional instance pooling.
- `rubylike.robject.RObject`: the base of the value types, giving
  `class_name`, `is_a`, `to_string` and `equal`.

## Installation

```
pip install rubylike
```

## Examples

```python
from rubylike.rstring import RString
from rubylike.rinteger import RInteger

RString("hello_world").to_camel_case().to_string()   # "helloWorld"
RString("hi").center(5, "*").to_string()             # "*hi**"
RInteger(12).gcd(RInteger(8)).to_string()            # "4"
RInteger(255).to_hex().to_string()                   # "ff"
```

```python
from rubylike.rhash import RHash

h = RHash()
h.set("name", "John")
h.set("age", 30)
h.to_json().to_string()   # '{"age":30,"name":"John"}'
h.to_csv().to_string()    # "key,value\nage,30\nname,John"
```

```python
from rubylike.rclass import new_class

animal = new_class("Animal")
animal.define_method("speak", lambda: "Some sound")

dog = new_class("Dog")
dog.inherit(animal)
dog.define_method("speak", lambda self: self.super("speak") + " - Woof!")

buddy = dog.new()
buddy.call("speak")        # "Some sound - Woof!"
buddy.is_a("Animal")       # True
```

A method function whose first parameter is named `self` receives the object
it is called on; its other parameters receive the call's arguments.

## Errors

- Calling a method that no class in the chain defines raises
  `rubylike.rclass.UndefinedMethodError` (a subclass of `AttributeError`),
  unless a `method_missing` handler has been set. `super` raises it too when
  there is no superclass method.
- Passing the wrong number of arguments to a defined method raises `TypeError`.
- `RInteger` division, modulo, `div_mod`, `ceil_div` and `fdiv` by zero raise
  `ZeroDivisionError`; `to_base` outside 2..36 and `digits` with a base below 2
  raise `ValueError`; `coerce` of an unsupported value raises `TypeError`.
- `RString.ord` on an empty string raises `ValueError`.
- `RHash.fetch` of a missing key with no default raises `KeyError`.

## What it does not do

This is a library only: it has no command-line tool, and nothing is stored
beyond the objects in memory.

## Running the tests

```
pip install "rubylike[test]"
pytest
```