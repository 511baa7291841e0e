# sofiacore

Support structures for a spectral-line source finder, in pure Python with no
dependencies outside the standard library.

## Modules

### `sofiacore.parameter`

`ParameterSet` is an ordered store of named settings, all held as strings.

- `set(key, value)` adds a setting or replaces an existing one in place.
- `set_defaults()` creates (or resets) the full list of default pipeline
  settings, such as `scfind.threshold = 5.0` or `linker.enable = true`.
- `load(filename, mode)` reads a parameter file made of lines of the form
  `key = value # comment`. Empty lines and lines that do not start with a
  letter or digit are skipped. With `LoadMode.APPEND` every setting is stored;
  with `LoadMode.UPDATE` only keys that already exist are updated, and if any
  unknown key was met and `pipeline.pedantic` is `true`, a `ParameterError` is
  raised once the file has been read. A setting of `pipeline.verbose` in the
  file switches the set's verbosity.
- Typed access: `get_flt` (NaN if the key is missing), `get_int` and
  `get_uint` (0 if missing), `get_bool` (true only for the exact value
  `true`), `get_str` (`None` if missing). Numbers are read from the leading
  part of the value, so `"12 px"` gives 12.
- Positional access: `index(key)` (raises `KeyError`), `key_at(i)` and
  `value_at(i)` (raise `IndexError`). The set also supports `len()`, `in`
  and iteration over its keys.
- An empty key raises `ParameterError`. When `verbose` is true, warnings
  (replaced settings, settings without a value) go to the
  `sofiacore.parameter` logger.

### `sofiacore.path`

`Path` keeps a path as a directory part (with trailing `/`) and a file name.

- `Path("data/cube.fits")` or `set(...)` splits at the last `/`.
- `set_dir()` adds a missing trailing slash; `set_file()` replaces the file
  name. Both reject empty strings with `PathError`.
- `set_file_from_template(basename, suffix, mimetype)` builds a file name from
  a base name with its extension removed.
- `append_dir_from_template(basename, appendix)` appends a sub-directory named
  the same way; `append_file(appendix)` extends the file name. Neither accepts
  a `/` in its arguments.
- `dir`, `file` and `full` (also `str(path)`) return the parts;
  `file_is_readable()` tells whether the full path can be opened for reading.

### `sofiacore.table`

`Table.from_file(filename, delimiters)` reads a numeric table from a text
file. Columns are split at any of the delimiter characters, with runs of
delimiters merged. Lines that are empty or do not start with a letter or
digit are skipped. The first data row fixes the number of columns: extra
columns are ignored, missing ones raise `TableError`. Entries that are not
numbers become 0. A file without data gives an empty table and logs a
warning. `rows` and `cols` give the size; `get(row, col)` and
`set(row, col, value)` raise `IndexError` when out of range.

### `sofiacore.stack`

`Stack` is a last-in, first-out stack of integers with `push()`, `pop()` and
`len()`. Popping an empty stack raises `StackUnderflowError`, a subclass of
`IndexError`.

## Installation

```
pip install .
```

## Example

```python
from sofiacore.parameter import LoadMode, ParameterSet
from sofiacore.path import Path
from sofiacore.stack import Stack
from sofiacore.table import Table

params = ParameterSet(verbose=False)
params.set_defaults()
print(params.get_flt("scfind.threshold"))   # 5.0
print(params.get_bool("linker.enable"))     # True
# params.load("my_settings.par", LoadMode.UPDATE)

out = Path("data/cube.fits")
out.set_file_from_template("cube.fits", "_mask", ".fits")
out.append_dir_from_template("cube.fits", "_cubelets")
print(out.full)                             # data/cube_cubelets/cube_mask.fits

# table = Table.from_file("catalogue.txt", " \t")
# print(table.rows, table.cols, table.get(0, 0))

stack = Stack()
stack.push(42)
print(stack.pop())                          # 42
```

## What this package does not do

There is no command-line program and no source-finding pipeline here: the
package does not read data cubes, filter, link or parameterise sources, or
write catalogues. It offers the pieces listed above for use from Python code.

## Running the tests

```
pip install .[test]
pytest
```