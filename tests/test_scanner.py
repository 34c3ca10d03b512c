import time

import pytest

from core.lua import LuaScanner, PropertyStatus, PropertyType, Quat, ScannerSettings, Vector3, Vector4, scan_file

EXPECTED_MODULES = [
    "a", "b", "c.d", "e.f", "g", "h", "i.j", "k.l", "m.n.o", "p.q.r", "s", "t",
] + [f"foo{i}" for i in range(1, 17)]

PROPS_LINES_REMOVED = {10, 13, 14, 15, 16, 17, 19, 20}


def _props(src):
    scanner = LuaScanner()
    scanner.parse(src)
    return scanner.get_properties()


def _by_name(props, name):
    return next(p for p in props if p.name == name)


def test_scanner_fixture_modules(fixture_text):
    scanner = LuaScanner()
    scanner.parse(fixture_text("test_scanner.lua"))

    assert scanner.get_modules() == EXPECTED_MODULES
    assert len(scanner.get_modules()) == 28

    requires = scanner.get_requires()
    assert requires[0].line == 0
    assert requires[12].line == 28
    assert (requires[-1].line, requires[-1].col) == (43, 4)


@pytest.mark.parametrize(
    "src",
    [
        'require "foo.bar" -- some comment',
        "require 'foo.bar' -- some comment",
        'require ("foo.bar") -- some comment',
        "require ('foo.bar') -- some comment",
        'require "foo.bar" --',
        "require 'foo.bar' --",
        'require ("foo.bar") --',
        "require ('foo.bar') --",
        'require "foo.bar" --[[ some comment]]--',
        "require 'foo.bar' --[[ some comment]]--",
        'require ("foo.bar") --[[ some comment]]--',
        "require ('foo.bar') --[[ some comment]]--",
    ],
)
def test_require_with_trailing_comment(src):
    scanner = LuaScanner()
    scanner.parse(src)

    assert scanner.get_modules() == ["foo.bar"]


def test_duplicate_requires_are_kept():
    scanner = LuaScanner()
    scanner.parse('require "a"\nrequire "a"\n')

    assert scanner.get_modules() == ["a", "a"]


def test_props_fixture(fixture_text):
    props = _props(fixture_text("test_props.lua"))

    assert len(props) == 8
    for name, line in (("prop1", 10), ("prop2", 13), ("prop3", 14), ("prop4", 15), ("prop5", 16)):
        prop = _by_name(props, name)
        assert prop.status is PropertyStatus.OK
        assert prop.type is PropertyType.NUMBER
        assert prop.value == 0.0
        assert prop.line == line

    assert props[5].status is PropertyStatus.INVALID_ARGS
    assert props[5].line == 17
    assert (_by_name(props, "three_args").status, _by_name(props, "three_args").line) == (
        PropertyStatus.INVALID_VALUE,
        19,
    )
    assert (_by_name(props, "unknown_type").status, _by_name(props, "unknown_type").line) == (
        PropertyStatus.INVALID_VALUE,
        20,
    )


def test_props_fixture_stripped(fixture_text):
    source = fixture_text("test_props.lua")
    scanner = LuaScanner()
    stripped = scanner.parse(source)

    lines = source.splitlines(keepends=True)
    expected = "".join(line for i, line in enumerate(lines) if i not in PROPS_LINES_REMOVED)
    assert stripped == expected
    assert len(scanner.get_properties()) == 8

    # the same instance, reused on its own output
    assert scanner.parse(stripped) == stripped
    assert scanner.get_properties() == []


def test_idempotent_and_modules_unchanged(fixture_text):
    source = fixture_text("test_scanner.lua") + fixture_text("test_props.lua")

    first = LuaScanner()
    stripped = first.parse(source)
    second = LuaScanner()
    again = second.parse(stripped)

    assert first.get_properties()
    assert second.get_properties() == []
    assert second.get_modules() == first.get_modules() == EXPECTED_MODULES
    assert again == stripped


def test_reuse_resets_results():
    scanner = LuaScanner()
    scanner.parse('require "a"\ngo.property("p", 1)\n')
    scanner.parse('require "b"\n')

    assert scanner.get_modules() == ["b"]
    assert scanner.get_properties() == []


def test_numbers():
    props = _props(
        'go.property("prop1", 12)\n'
        'go.property("prop2", 1.0)\n'
        'go.property("prop3", .1)\n'
        'go.property("prop4", -1.0E2)\n'
    )

    assert [(p.name, p.value, p.line) for p in props] == [
        ("prop1", 12.0, 0),
        ("prop2", 1.0, 1),
        ("prop3", 0.1, 2),
        ("prop4", -100.0, 3),
    ]


def test_hash():
    props = _props(
        'go.property("prop1", hash("hash"))\n'
        'go.property("prop2", hash(""))\n'
        'go.property("prop3", hash(foo))\n'
        "go.property(\"prop4\", hash('hash'))\n"
    )

    assert [(p.status, p.value, p.line) for p in props] == [
        (PropertyStatus.OK, "hash", 0),
        (PropertyStatus.OK, "", 1),
        (PropertyStatus.INVALID_VALUE, None, 2),
        (PropertyStatus.OK, "hash", 3),
    ]
    assert all(p.type is PropertyType.HASH for p in props)


@pytest.mark.parametrize(
    "ctor, ptype",
    [("msg.url", PropertyType.URL), ("resource.material", PropertyType.MATERIAL)],
)
def test_url_and_material(ctor, ptype):
    word = ctor.split(".")[-1]
    props = _props(
        f'go.property("prop1", {ctor}("{word}"))\n'
        f'go.property("prop2", {ctor}(""))\n'
        f'go.property("prop3", {ctor}())\n'
        f"go.property(\"prop4\", {ctor}('{word}'))\n"
    )

    assert [(p.type, p.status, p.value) for p in props] == [
        (ptype, PropertyStatus.OK, word),
        (ptype, PropertyStatus.OK, ""),
        (ptype, PropertyStatus.OK, ""),
        (ptype, PropertyStatus.OK, word),
    ]


def test_vectors():
    props = _props(
        'go.property("v3a", vmath.vector3())\n'
        'go.property("v3b", vmath.vector3(1, 2, 3))\n'
        'go.property("v3c", vmath.vector3(1, 2))\n'
        'go.property("v3d", vmath.vector3(1, x, 3))\n'
        'go.property("v4a", vmath.vector4())\n'
        'go.property("v4b", vmath.vector4(1, 2, 3, 4))\n'
        'go.property("q1", vmath.quat())\n'
        'go.property("q2", vmath.quat(1, 2, 3, 4))\n'
    )

    assert [(p.name, p.status, p.value) for p in props] == [
        ("v3a", PropertyStatus.OK, Vector3(0, 0, 0)),
        ("v3b", PropertyStatus.OK, Vector3(1, 2, 3)),
        ("v3c", PropertyStatus.INVALID_ARGS, None),
        ("v3d", PropertyStatus.INVALID_VALUE, None),
        ("v4a", PropertyStatus.OK, Vector4(0, 0, 0, 0)),
        ("v4b", PropertyStatus.OK, Vector4(1, 2, 3, 4)),
        ("q1", PropertyStatus.OK, Quat(0, 0, 0, 1)),
        ("q2", PropertyStatus.OK, Quat(1, 2, 3, 4)),
    ]


def test_bool():
    props = _props('go.property("prop1", true)\ngo.property("prop2", false)\n')

    assert [(p.type, p.value) for p in props] == [(PropertyType.BOOLEAN, True), (PropertyType.BOOLEAN, False)]


def test_malformed_properties_are_reported_not_dropped():
    scanner = LuaScanner()
    stripped = scanner.parse('go.property()\ngo.property("a")\ngo.property("b", nope)\nx = 1\n')

    assert [p.status for p in scanner.get_properties()] == [
        PropertyStatus.INVALID_ARGS,
        PropertyStatus.INVALID_ARGS,
        PropertyStatus.INVALID_VALUE,
    ]
    assert scanner.has_errors()
    assert stripped == "x = 1\n"


def test_requires_are_never_stripped():
    src = 'local a = require "a"\ngo.property("p", 1)\nlocal b = require("b")\n'
    scanner = LuaScanner()

    assert scanner.parse(src) == 'local a = require "a"\nlocal b = require("b")\n'
    assert scanner.get_modules() == ["a", "b"]


def test_source_without_properties_is_returned_unchanged():
    src = "-- nothing to see\nlocal x = 1\n"

    assert LuaScanner().parse(src) == src


def test_custom_call_names():
    settings = ScannerSettings(require_call="import", property_call="script.prop")
    scanner = LuaScanner(settings)
    stripped = scanner.parse('import "a.b"\nrequire "c"\nscript.prop("p", 1)\ngo.property("q", 2)\n')

    assert scanner.get_modules() == ["a.b"]
    assert [p.name for p in scanner.get_properties()] == ["p"]
    assert stripped == 'import "a.b"\nrequire "c"\ngo.property("q", 2)\n'


def test_scan_file(tmp_path):
    path = tmp_path / "player.script"
    path.write_text('require "main.util"\ngo.property("speed", 5)\n', encoding="utf-8")

    scanner, stripped = scan_file(path)

    assert scanner.get_modules() == ["main.util"]
    assert scanner.get_properties()[0].value == 5.0
    assert stripped == 'require "main.util"\n'


def test_scan_file_propagates_read_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        scan_file(tmp_path / "missing.script")


def _best_parse_time(source, rounds=3):
    best = float("inf")
    for _ in range(rounds):
        started = time.perf_counter()
        LuaScanner().parse(source)
        best = min(best, time.perf_counter() - started)
    return best


def test_scan_time_grows_linearly_with_input():
    line = 'require "m{i}"\ngo.property("p{i}", {i}) -- c\n'
    small = "".join(line.format(i=i) for i in range(1000))
    large = "".join(line.format(i=i) for i in range(4000))

    _best_parse_time(small, rounds=1)
    ratio = _best_parse_time(large) / _best_parse_time(small)

    # four times the input; a quadratic scan lands near 16
    assert ratio < 9
