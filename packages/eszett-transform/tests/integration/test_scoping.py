import copy
import hashlib

from eszett.config import EszettConfig
from eszett.test_utils.js import (
    arrow,
    block,
    const,
    default,
    default_spec,
    fn,
    fn_expr,
    ident,
    import_decl,
    lit,
    member,
    named_spec,
    namespace_spec,
    obj,
    obj_pattern,
    program,
    prop,
    ret,
    tagged,
    tpl,
    try_catch,
    call,
    var,
)
from eszett.test_utils.printer import render
from eszett.transform import transform_program


def run(tree, filename="file.js", **options):
    result = transform_program(tree, filename, EszettConfig(**options))
    return render(result.program)


def sz_import():
    return import_decl("eszett", default_spec("sz"))


def scope_name_import(local="scopeName"):
    return import_decl("eszett", named_spec("scopeName", local))


# --- Imports ---


def test_removes_default_magic_import():
    assert run(program(sz_import())) == ""


def test_removes_named_magic_import():
    assert run(program(scope_name_import())) == ""


def test_removes_combined_magic_import():
    tree = program(import_decl("eszett", default_spec("sz"), named_spec("scopeName", "foo")))
    assert run(tree) == ""


def test_removes_namespace_magic_import():
    assert run(program(import_decl("eszett", namespace_spec("all")))) == ""


def test_keeps_other_imports():
    tree = program(import_decl("some_import", default_spec("sz")))
    assert run(tree) == 'import sz from "some_import";'


def test_untouched_file_only_loses_the_magic_import():
    # Arrange
    tree = program(
        import_decl("react", default_spec("React")),
        sz_import(),
        fn("one", ["a"], const("b", call(member("a", "map"), "x")), ret("b")),
    )
    expected = copy.deepcopy(tree)
    del expected["body"][1]

    # Act
    result = transform_program(tree, "file.js")

    # Assert
    assert result.program == expected
    assert result.state.stats.imports_removed == 1


# --- Tagged templates ---


def test_replaces_tagged_template_literals():
    tree = program(sz_import(), const("hui", tagged("sz", tpl("my-class"))))
    assert run(tree) == 'const hui = "ß-file_js-0 " + `my-class`;'


def test_works_with_empty_template_literal():
    tree = program(sz_import(), const("hui", tagged("sz")))
    assert run(tree) == 'const hui = "ß-file_js-0 " + ``;'


def test_keeps_template_expressions():
    tree = program(sz_import(), const("hui", tagged("sz", tpl("a-", "size", "-b"))))
    assert run(tree) == 'const hui = "ß-file_js-0 " + `a-${size}-b`;'


def test_leaves_other_tags_alone():
    tree = program(sz_import(), const("hui", tagged("css", tpl("my-class"))))
    assert run(tree) == "const hui = css`my-class`;"


def test_leaves_member_expression_tags_alone():
    tree = program(sz_import(), const("hui", tagged(member("styles", "sz"), tpl("a"))))
    assert run(tree) == "const hui = styles.sz`a`;"


def test_named_tag_import_is_recognised():
    tree = program(
        import_decl("eszett", named_spec("sz", "css")),
        const("hui", tagged("css", tpl("a"))),
    )
    assert run(tree) == 'const hui = "ß-file_js-0 " + `a`;'


def test_tag_without_import_is_left_alone():
    tree = program(const("hui", tagged("sz", tpl("a"))))
    assert run(tree) == "const hui = sz`a`;"


# --- Scope ids ---


def test_creates_a_new_scope_for_each_root_function():
    tree = program(
        sz_import(),
        fn("one", [], const("hui", tagged("sz", tpl("my-class")))),
        fn("two", [], const("hui", tagged("sz", tpl("my-class")))),
    )
    assert run(tree) == (
        'function one() { const hui = "ß-file_js-1 " + `my-class`; }\n'
        'function two() { const hui = "ß-file_js-2 " + `my-class`; }'
    )


def test_uses_the_same_scope_throughout_a_function_body():
    tree = program(
        sz_import(),
        fn(
            "one",
            [],
            const("hui", tagged("sz", tpl("my-class"))),
            const("buh", tagged("sz", tpl("my-class"))),
        ),
    )
    assert run(tree) == (
        "function one() { "
        'const hui = "ß-file_js-1 " + `my-class`; '
        'const buh = "ß-file_js-1 " + `my-class`; '
        "}"
    )


def test_uses_the_same_scope_in_lexically_nested_functions():
    tree = program(
        sz_import(),
        fn(
            "one",
            [],
            const("hui", tagged("sz", tpl("my-class"))),
            fn("two", [], const("buh", tagged("sz", tpl("my-class")))),
        ),
    )
    assert run(tree) == (
        "function one() { "
        'const hui = "ß-file_js-1 " + `my-class`; '
        'function two() { const buh = "ß-file_js-1 " + `my-class`; } '
        "}"
    )


def test_creates_a_new_scope_for_each_root_arrow_function():
    tree = program(
        sz_import(),
        const("one", arrow([], const("hui", tagged("sz", tpl("my-class"))))),
    )
    assert run(tree) == 'const one = () => { const hui = "ß-file_js-1 " + `my-class`; };'


def test_uses_the_same_scope_in_functions_nested_in_arrows():
    tree = program(
        sz_import(),
        const(
            "one",
            arrow(
                [],
                const("hui", tagged("sz", tpl("my-class"))),
                fn("two", [], const("buh", tagged("sz", tpl("my-class")))),
            ),
        ),
    )
    assert run(tree) == (
        "const one = () => { "
        'const hui = "ß-file_js-1 " + `my-class`; '
        'function two() { const buh = "ß-file_js-1 " + `my-class`; } '
        "};"
    )


def test_module_code_after_a_function_returns_to_scope_zero():
    tree = program(
        sz_import(),
        fn("one", [], const("a", tagged("sz", tpl("a")))),
        const("b", tagged("sz", tpl("b"))),
    )
    assert run(tree).splitlines()[1] == 'const b = "ß-file_js-0 " + `b`;'


def test_nested_scopes_give_every_function_its_own_id():
    tree = program(
        sz_import(),
        fn(
            "one",
            [],
            const("a", tagged("sz", tpl("a"))),
            fn("two", [], const("b", tagged("sz", tpl("b")))),
            const("c", tagged("sz", tpl("c"))),
        ),
    )
    assert run(tree, nested_scopes=True) == (
        "function one() { "
        'const a = "ß-file_js-1 " + `a`; '
        'function two() { const b = "ß-file_js-2 " + `b`; } '
        'const c = "ß-file_js-1 " + `c`; '
        "}"
    )


def test_nested_scopes_leave_function_expressions_in_the_enclosing_scope():
    tree = program(
        sz_import(),
        fn("one", [], const("f", fn_expr(None, [], ret(tagged("sz", tpl("a")))))),
    )
    assert run(tree, nested_scopes=True) == (
        "function one() { "
        'const f = function() { return "ß-file_js-1 " + `a`; }; '
        "}"
    )


# --- Scope name reads ---


def test_replaces_scope_name_variable_with_current_scope():
    tree = program(scope_name_import(), const("scope", "scopeName"))
    assert run(tree) == 'const scope = "ß-file_js-0";'


def test_replaces_scope_name_variable_when_renamed_in_import():
    tree = program(scope_name_import("sc"), const("scope", "sc"))
    assert run(tree) == 'const scope = "ß-file_js-0";'


def test_replaces_scope_name_imported_by_string_name():
    tree = program(
        import_decl("eszett", named_spec("scopeName", "sc", string=True)),
        const("scope", "sc"),
    )
    assert run(tree) == 'const scope = "ß-file_js-0";'


def test_does_not_replace_other_variables_with_the_scope_name_name():
    tree = program(scope_name_import("sc"), const("scope", "scopeName"))
    assert run(tree) == "const scope = scopeName;"


def test_does_not_replace_variables_shadowing_scope_name():
    tree = program(
        scope_name_import(),
        fn("hui", [], const("scopeName", lit("lorem")), const("bar", "scopeName")),
    )
    assert run(tree) == 'function hui() { const scopeName = "lorem"; const bar = scopeName; }'


def test_does_not_replace_parameters_shadowing_scope_name():
    tree = program(scope_name_import(), fn("hui", ["scopeName"], ret("scopeName")))
    assert run(tree) == "function hui(scopeName) { return scopeName; }"


def test_does_not_replace_destructured_shadows():
    tree = program(
        scope_name_import(),
        fn("hui", [obj_pattern("scopeName")], ret("scopeName")),
    )
    assert run(tree) == "function hui({ scopeName }) { return scopeName; }"


def test_does_not_replace_catch_parameter_shadows():
    tree = program(
        scope_name_import(),
        fn("hui", [], try_catch("scopeName", [], [ret("scopeName")])),
    )
    assert run(tree) == "function hui() { try {} catch (scopeName) { return scopeName; } }"


def test_block_shadow_does_not_leak_to_outer_reads():
    tree = program(
        scope_name_import(),
        fn(
            "hui",
            [],
            block(const("scopeName", lit("inner")), ret("scopeName")),
            ret("scopeName"),
        ),
    )
    assert run(tree) == (
        "function hui() { "
        '{ const scopeName = "inner"; return scopeName; } '
        'return "ß-file_js-1"; '
        "}"
    )


def test_expands_shorthand_properties():
    tree = program(scope_name_import(), const("props", obj(prop("scopeName"))))
    assert run(tree) == 'const props = { scopeName: "ß-file_js-0" };'


def test_destructuring_defaults_keep_shorthand():
    # Arrange
    pattern = obj_pattern(dict(prop("a", default("a", lit(1))), shorthand=True))
    tree = program(sz_import(), const(pattern, "o"))
    expected = copy.deepcopy(tree)
    del expected["body"][0]

    # Act
    result = transform_program(tree, "file.js")

    # Assert
    assert result.program == expected
    assert render(result.program) == "const { a = 1 } = o;"


def test_parameter_default_does_not_see_body_var():
    tree = program(
        scope_name_import(),
        fn("f", [default("a", "scopeName")], var("scopeName"), ret("scopeName")),
    )
    assert run(tree) == (
        'function f(a = "ß-file_js-1") { var scopeName; return scopeName; }'
    )


def test_does_not_replace_property_keys():
    tree = program(
        scope_name_import(),
        const("props", obj(prop("scopeName", lit(1)))),
        const("value", member("props", "scopeName")),
    )
    assert run(tree) == (
        "const props = { scopeName: 1 };\n"
        "const value = props.scopeName;"
    )


def test_scope_name_read_uses_enclosing_function_scope():
    tree = program(
        scope_name_import(),
        fn("one", [], ret("scopeName")),
        fn("two", [], ret(call("f", "scopeName"))),
    )
    assert run(tree) == (
        'function one() { return "ß-file_js-1"; }\n'
        'function two() { return f("ß-file_js-2"); }'
    )


def test_import_after_use_is_still_resolved():
    tree = program(const("scope", "scopeName"), scope_name_import())
    assert run(tree) == 'const scope = "ß-file_js-0";'


# --- Configuration ---


def test_hashed_file_identity():
    digest = hashlib.sha256(b"src/Button.jsx").hexdigest()[:10]
    tree = program(scope_name_import(), const("scope", "scopeName"))

    assert run(tree, "src/Button.jsx", hash_file_identity=True) == (
        f'const scope = "ß-{digest}-0";'
    )


def test_custom_marker_and_module():
    tree = program(
        import_decl("@acme/scoped", named_spec("scopeName")),
        const("scope", "scopeName"),
    )
    assert run(tree, "src/a.js", marker="x", module="@acme/scoped") == (
        'const scope = "x-src_a_js-0";'
    )


def test_identity_is_relative_to_config_root(tmp_path):
    tree = program(scope_name_import(), const("scope", "scopeName"))
    source = tmp_path / "src" / "Button.jsx"

    assert run(tree, source, root=tmp_path) == 'const scope = "ß-src_Button_jsx-0";'


def test_stats_are_collected():
    # Arrange
    tree = program(
        import_decl("eszett", default_spec("sz"), named_spec("scopeName")),
        fn("one", [], const("a", tagged("sz", tpl("a"))), ret("scopeName")),
        const("b", ident("scopeName")),
    )

    # Act
    result = transform_program(tree, "file.js")

    # Assert
    assert result.state.stats.as_dict() == {
        "scopes": 1,
        "templates": 1,
        "scope_names": 2,
        "elements": 0,
        "imports_removed": 1,
    }
