import math

import pytest

from sofiacore.parameter import LoadMode, ParameterError, ParameterSet


@pytest.fixture
def defaults():
    params = ParameterSet(False)
    params.set_defaults()
    return params


def write(tmp_path, text, name="par.txt"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_set_and_get_str():
    params = ParameterSet(False)
    params.set("a.b", "hello")
    assert params.get_str("a.b") == "hello"
    assert len(params) == 1
    assert "a.b" in params


def test_set_replaces_without_growing():
    params = ParameterSet(False)
    params.set("k", "1")
    params.set("other", "2")
    params.set("k", "3")
    assert len(params) == 2
    assert params.get_str("k") == "3"
    assert params.index("k") == 0


def test_iteration_preserves_insertion_order():
    params = ParameterSet(False)
    for key in ("z", "a", "m"):
        params.set(key, key)
    assert list(params) == ["z", "a", "m"]
    assert [params.key_at(i) for i in range(3)] == ["z", "a", "m"]
    assert params.value_at(1) == "a"


def test_missing_key_defaults():
    params = ParameterSet(False)
    assert math.isnan(params.get_flt("nope"))
    assert params.get_int("nope") == 0
    assert params.get_uint("nope") == 0
    assert params.get_bool("nope") is False
    assert params.get_str("nope") is None
    assert "nope" not in params


def test_index_missing_raises_key_error():
    params = ParameterSet(False)
    with pytest.raises(KeyError):
        params.index("missing")


def test_empty_key_rejected():
    params = ParameterSet(False)
    with pytest.raises(ParameterError):
        params.set("", "x")
    with pytest.raises(ParameterError):
        params.get_str("")


def test_numeric_prefix_parsing():
    params = ParameterSet(False)
    params.set("i", "42abc")
    params.set("f", "  2.5 x")
    params.set("junk", "abc")
    assert params.get_int("i") == 42
    assert params.get_flt("f") == 2.5
    assert params.get_int("junk") == 0
    assert params.get_flt("junk") == 0.0


def test_uint_wraps_negative():
    params = ParameterSet(False)
    params.set("n", "-1")
    assert params.get_int("n") == -1
    assert params.get_uint("n") == 2**64 - 1


def test_bool_requires_exact_true():
    params = ParameterSet(False)
    params.set("t", "true")
    params.set("u", "True")
    assert params.get_bool("t") is True
    assert params.get_bool("u") is False


def test_index_out_of_range():
    params = ParameterSet(False)
    params.set("k", "v")
    with pytest.raises(IndexError):
        params.key_at(1)
    with pytest.raises(IndexError):
        params.value_at(-1)


def test_defaults(defaults):
    assert defaults.get_str("scfind.kernelsXY") == "0, 3, 6"
    assert defaults.get_flt("reliability.threshold") == 0.9
    assert defaults.get_bool("pipeline.pedantic") is True
    assert defaults.get_str("parameter.prefix") == "SoFiA"
    assert defaults.get_int("output.marginCubelets") == 10
    assert defaults.key_at(0) == "pipeline.verbose"


def test_set_defaults_resets_values(defaults):
    size = len(defaults)
    defaults.set("linker.radiusXY", "7")
    defaults.set_defaults()
    assert defaults.get_str("linker.radiusXY") == "1"
    assert len(defaults) == size


def test_load_append(tmp_path):
    path = write(
        tmp_path,
        "# a comment\n"
        "\n"
        "  alpha = 1.5   # trailing comment\n"
        "beta=text with = sign\n"
        "gamma =\n"
        "delta = ## only comment\n"
        "=orphan\n",
    )
    params = ParameterSet(False)
    params.load(path, LoadMode.APPEND)
    assert list(params) == ["alpha", "beta", "gamma", "delta"]
    assert params.get_flt("alpha") == 1.5
    assert params.get_str("beta") == "text with = sign"
    assert params.get_str("gamma") == ""
    assert params.get_str("delta") == ""


def test_load_update_ignores_unknown_when_not_pedantic(tmp_path, defaults):
    defaults.set("pipeline.pedantic", "false")
    size = len(defaults)
    path = write(tmp_path, "linker.radiusZ = 3\nunknown.key = 5\n")
    defaults.load(path, LoadMode.UPDATE)
    assert defaults.get_int("linker.radiusZ") == 3
    assert "unknown.key" not in defaults
    assert len(defaults) == size


def test_load_update_pedantic_raises(tmp_path, defaults):
    path = write(tmp_path, "unknown.key = 5\n")
    with pytest.raises(ParameterError):
        defaults.load(path, LoadMode.UPDATE)


def test_load_updates_verbosity(tmp_path, defaults):
    path = write(tmp_path, "pipeline.verbose = true\n")
    assert defaults.verbose is False
    defaults.load(path, LoadMode.UPDATE)
    assert defaults.verbose is True


def test_load_missing_file(tmp_path):
    params = ParameterSet(False)
    with pytest.raises(ParameterError):
        params.load(tmp_path / "absent.par", LoadMode.APPEND)


def test_load_empty_filename():
    params = ParameterSet(False)
    with pytest.raises(ParameterError):
        params.load("", LoadMode.APPEND)


def test_load_bad_mode(tmp_path):
    path = write(tmp_path, "a = 1\n")
    params = ParameterSet(False)
    with pytest.raises(ParameterError):
        params.load(path, 7)
    assert len(params) == 0


def test_load_accepts_integer_mode(tmp_path):
    path = write(tmp_path, "a = 1\n")
    params = ParameterSet(False)
    params.load(path, 0)
    assert params.get_int("a") == 1