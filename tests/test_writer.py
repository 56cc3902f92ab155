import logging

import pytest

from classwriter import (
    ClassWriter,
    CollectingErrorSink,
    LoggingErrorSink,
    NoActiveBlockError,
    Statement,
    WriterConfig,
)


def test_scenario_main_block(writer: ClassWriter) -> None:
    writer.new_block("main", 0)
    writer.enter_block("main")
    writer.writeln("x=1;")
    writer.leave_block()
    assert writer.get_block_content("main") == "x=1;\n"


def test_no_dependencies(writer: ClassWriter) -> None:
    assert writer.get_dependencies() == ""


def test_dependencies_deduplicated(writer: ClassWriter) -> None:
    writer.add_dependency("A.B")
    writer.add_dependency("A.B")
    writer.add_dependencies(["C.D", "A.B"])
    assert writer.get_dependencies() == '$dependencies: ["A.B","C.D"],'
    assert writer.dependencies == ["A.B", "C.D"]


def test_stringify_escapes(writer: ClassWriter) -> None:
    assert writer.stringify("a") == '"a"'
    assert writer.stringify('say "hi"\n') == '"say \\"hi\\"\\n"'


def test_wrap_expression(writer: ClassWriter) -> None:
    writer.new_block("main", 0)
    writer.enter_block("main")
    name = writer.wrap_expression("a+b", Statement("foo", line_number=7), "EVAL_ERR")
    assert name == "__v_1_3"
    assert writer.get_block_content("main") == (
        "var __v_1_3 = null;\n"
        "try {\n"
        ' eval( "__v_1_3=(a+b)" );\n'
        "} catch (e) {\n"
        ' this.$logError(EVAL_ERR,["a+b",7,"foo"], e);\n'
        "}\n"
    )


def test_wrap_expression_escapes_quotes(writer: ClassWriter) -> None:
    writer.new_block("main", 1)
    writer.enter_block("main")
    writer.wrap_expression('x["k"]', Statement("#EXPRESSION#", line_number=2), "this.ERR")
    content = writer.get_block_content("main")
    assert ' eval( "__v_1_3=(x[\\"k\\"])" );\n' in content
    assert '  this.$logError(this.ERR,["x[\\"k\\"]",2,"#EXPRESSION#"], e);\n' in content
    # indentation is back to the block's level afterwards
    assert content.endswith(" }\n")


def test_wrap_expression_names_advance(writer: ClassWriter) -> None:
    writer.new_block("main")
    writer.enter_block("main")
    stmt = Statement("foo", line_number=1)
    assert writer.wrap_expression("a", stmt, "E") == "__v_1_3"
    assert writer.wrap_expression("b", stmt, "E") == "__v_2_3"
    assert writer.new_var_name() == "__v_3_3"


def test_track_line(writer: ClassWriter) -> None:
    writer.track_line(12)  # no block: nothing happens
    writer.new_block("main", 0)
    writer.enter_block("main")
    writer.track_line(12)
    assert writer.get_block_content("main") == "this['aria:currentLineNumber'] = 12;\n"


def test_track_line_custom_prefix(sink: CollectingErrorSink) -> None:
    out = ClassWriter(lambda w, s: None, sink, config=WriterConfig(framework_prefix="fw_"))
    out.new_block("main")
    out.enter_block("main")
    out.track_line(3)
    assert out.get_block_content("main") == "this['fw_currentLineNumber'] = 3;\n"


def test_indent_unit_can_be_disabled(writer: ClassWriter) -> None:
    writer.indent_unit = None
    writer.new_block("main", 4)
    writer.enter_block("main")
    writer.increase_indent()
    writer.writeln("flat")
    assert writer.get_block_content("main") == "flat\n"


def test_writing_without_block_is_a_contract_violation(writer: ClassWriter, sink: CollectingErrorSink) -> None:
    assert not writer.is_output_ready()
    with pytest.raises(NoActiveBlockError):
        writer.writeln("x")
    assert not writer.errors
    assert sink.messages == []


def test_macros_and_views(writer: ClassWriter) -> None:
    stmt = Statement("macro", line_number=4, param_block="main")
    writer.get_macro("main").definition = stmt
    assert writer.get_macro("main").definition is stmt
    view = writer.get_view("rows")
    view.first_definition = stmt
    view.nb_params = 1
    assert writer.get_view("rows").nb_params == 1
    assert "main" in writer.macros
    assert "other" not in writer.views


def test_sticky_error_flag(writer: ClassWriter, sink: CollectingErrorSink) -> None:
    stmt = Statement("foreach", line_number=9)
    writer.error_context = {"classpath": "app.Tpl"}
    writer.log_warn(stmt, "W1")
    assert not writer.errors
    writer.log_error(stmt, "E1", ["x"])
    assert writer.errors
    writer.log_warn(stmt, "W2")
    writer.log_warn(None, "W3")
    assert writer.errors
    assert sink.msg_ids() == ["W1", "E1", "W2", "W3"]
    err = sink.messages[1]
    assert err.statement is stmt
    assert err.msg_args == ["x"]
    assert err.error_context == {"classpath": "app.Tpl"}


def test_process_content_calls_processor_in_order(sink: CollectingErrorSink) -> None:
    seen: list[tuple[ClassWriter, str]] = []

    class Recorder:
        def handle(self, out: ClassWriter, statement: Statement) -> None:
            seen.append((out, statement.name))

    out = ClassWriter(Recorder().handle, sink)
    out.process_content([Statement("a"), Statement("b"), Statement("c")])
    assert [name for _, name in seen] == ["a", "b", "c"]
    assert all(w is out for w, _ in seen)


def test_default_sink_logs(caplog: pytest.LogCaptureFixture) -> None:
    out = ClassWriter(lambda w, s: None)
    with caplog.at_level(logging.WARNING, logger="classwriter.errors"):
        out.log_error(Statement("if", line_number=5), "BAD_IF")
    assert out.errors
    assert "BAD_IF at line 5 (if)" in caplog.text


def test_logging_sink_uses_given_logger(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("tests.sink")
    out = ClassWriter(lambda w, s: None, LoggingErrorSink(log, logging.ERROR))
    with caplog.at_level(logging.ERROR, logger="tests.sink"):
        out.log_warn(None, "NOTE", ["a"])
    assert "NOTE ['a']" in caplog.text
    assert not out.errors


def test_generation_context_defaults(writer: ClassWriter) -> None:
    assert writer.parent_class_type == "JS"
    assert writer.wlibs == {}
    assert writer.parent_classpath is None
    assert writer.callback is None
    assert writer.debug is False
