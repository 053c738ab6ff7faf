"""Interpreter tests: node evaluation, calls and module dispatch."""

import logging
import textwrap

from azalea.errors import ModuleError
from azalea.modules import FileModule, NetModule, ViewModule
from azalea.runtime import VOID, CapabilityModule, Interpreter, Value, ValueKind


class FailingModule(CapabilityModule):
    name = "broken"

    def invoke(self, method, args):
        raise ModuleError(f"cannot {method}")


class RecordingModule(CapabilityModule):
    name = "rec"

    def __init__(self):
        self.calls = []

    def invoke(self, method, args):
        self.calls.append((method, [arg.to_string() for arg in args]))
        return len(args)


def test_program_returns_last_statement_value(run) -> None:
    assert run("1 2 3") == Value.number(3)
    assert run("") is VOID


def test_declaration_returns_and_binds_value(interpreter, run) -> None:
    assert run("form x from 2 times 4") == Value.number(8)
    assert interpreter.lookup("x") == Value.number(8)


def test_declaration_without_value_binds_void(interpreter, run) -> None:
    run("declare nothing")
    assert "nothing" in interpreter.scopes
    assert interpreter.lookup("nothing") is VOID


def test_boolean_and_string_literals(run) -> None:
    assert run("give true") == Value.boolean(True)
    assert run('"text"') == Value.text("text")


def test_arithmetic_and_comparison(run) -> None:
    assert run("7 minus 2 times 3") == Value.number(1)
    assert run("9 div 2") == Value.number(4.5)
    assert run("3 over 2") == Value.boolean(True)
    assert run("3 under 2") == Value.boolean(False)
    assert run('"abc" same "abc"') == Value.boolean(True)
    assert run("1 not 2") == Value.boolean(True)
    assert run("1 not 1") == Value.boolean(False)
    assert run("give true and false or true") == Value.boolean(True)


def test_division_by_zero_yields_zero(run) -> None:
    assert run("10 div 0") == Value.number(0)
    assert run('10 div "zero"') == Value.number(0)


def test_text_operands_are_coerced(run) -> None:
    assert run('"4" plus "twelve"') == Value.number(16)


def test_unknown_identifier_is_void_unless_a_number_word(run) -> None:
    assert run("mystery") is VOID
    assert run("ten plus five") == Value.number(15)


def test_bound_name_shadows_number_word(run) -> None:
    assert run("form ten from 3 ten") == Value.number(3)


def test_function_definition_and_call(interpreter, run, printed) -> None:
    source = textwrap.dedent(
        """
        act greet who do
            say who
        end
        call greet "Ada"
        """
    )
    assert run(source) == Value.text("Ada")
    assert printed == ["Ada"]
    assert "greet" in interpreter.functions


def test_function_definition_returns_function_value(run) -> None:
    value = run("act f a do give a end")
    assert value.kind is ValueKind.FUNCTION
    assert value.data.params == ("a",)


def test_call_binds_parameters_positionally(run) -> None:
    run("act sum a, b do give a plus b end")
    assert run("call sum 2, 3") == Value.number(5)
    assert run("call sum 2, 3, 4") == Value.number(5)
    assert run("call sum 2") == Value.number(2)


def test_parameters_do_not_leak_after_call(interpreter, run) -> None:
    run("act f a do give a end call f 1")
    assert interpreter.lookup("a") is VOID
    assert interpreter.scopes.depth == 0


def test_free_variables_resolve_against_callers_scope(run) -> None:
    run("act show_level do give level end")
    assert run("call show_level") is VOID
    source = "loop 1 do form level from 7 call show_level end"
    assert run(source) == Value.number(7)


def test_function_value_held_in_variable_is_callable(run) -> None:
    run("act double n do give n times 2 end form twice from double")
    assert run("call twice 4") == Value.number(8)


def test_unknown_call_target_is_void(run, caplog) -> None:
    run("act greet who do give who end")
    with caplog.at_level(logging.DEBUG, logger="azalea"):
        assert run("call gret 1") is VOID
    assert "did you mean 'greet'" in caplog.text


def test_recursion_stops_at_call_depth_limit(printed, caplog) -> None:
    interpreter = Interpreter(print_fn=printed.append, max_call_depth=5)
    source = "act down do say 1 call down end call down"
    with caplog.at_level(logging.WARNING, logger="azalea"):
        assert interpreter.execute(source) is VOID
    assert printed == ["1"] * 5
    assert "Call depth limit (5)" in caplog.text
    assert interpreter.state.depth == 0
    assert interpreter.scopes.depth == 0


def test_conditional_evaluates_one_branch(run, printed) -> None:
    run('if 0 do say "a" end else do say "b" end')
    run('if "x" do say "c" end')
    assert printed == ["b", "c"]
    assert run('if 0 do say "a" end') is VOID


def test_conditional_without_then_block_is_void(run, printed) -> None:
    assert run("if 1 over 0 give 5") == Value.number(5)
    assert run("if 1") is VOID
    assert printed == []


def test_else_if_chain(run, printed) -> None:
    run('if 0 do say "a" end else if 1 do say "b" end else do say "c" end')
    assert printed == ["b"]


def test_loop_returns_last_iteration_value(run) -> None:
    assert run("loop 4 do give step times 10 end") == Value.number(30)
    assert run("loop 0 do give 1 end") is VOID
    assert run("loop 2.9 do give step end") == Value.number(1)
    assert run("loop 0 minus 3 do give 1 end") is VOID


def test_loop_count_is_evaluated_once(run, printed) -> None:
    source = textwrap.dedent(
        """
        form n from 2
        loop n do
            put n plus 1 to n
            say step
        end
        n
        """
    )
    assert run(source) == Value.number(4)
    assert printed == ["0", "1"]


def test_loop_with_non_finite_count_is_skipped(run, printed, caplog) -> None:
    huge = "9" * 400
    with caplog.at_level(logging.WARNING, logger="azalea"):
        assert run(f"loop {huge} do say step end") is VOID
    assert printed == []
    assert "not finite" in caplog.text


def test_output_repeat_and_label(interpreter, run, printed) -> None:
    assert run("say 2 \"hi\" name 'greeting'") == Value.text("hi")
    assert printed == ["hi", "hi"]
    assert interpreter.lookup("greeting") == Value.text("hi")


def test_output_without_value_prints_void(run, printed) -> None:
    run("say")
    assert printed == ["void"]


def test_assignment_without_target_passes_value_through(interpreter, run) -> None:
    assert run("put 5") == Value.number(5)
    assert interpreter.scopes.globals == {}


def test_module_dispatch(printed) -> None:
    recorder = RecordingModule()
    interpreter = Interpreter(print_fn=printed.append, modules=[recorder])
    result = interpreter.execute('call rec store "a", 2')
    assert recorder.calls == [("store", ["a", "2"])]
    assert result == Value.number(2)


def test_module_names_take_priority_over_functions(printed) -> None:
    interpreter = Interpreter(print_fn=printed.append, modules=[NetModule()])
    interpreter.execute("act net do give 1 end")
    assert interpreter.execute('call net get "u"') == Value.text("GET u")


def test_implicit_module_call(printed) -> None:
    interpreter = Interpreter(print_fn=printed.append, modules=[NetModule()])
    assert interpreter.execute('net get "http://example.com"') == Value.text("GET http://example.com")


def test_element_names_call_the_view_module(printed) -> None:
    interpreter = Interpreter(print_fn=printed.append, modules=[ViewModule()])
    result = interpreter.execute('button "Go"')
    assert result.data["text"] == Value.text("Go")

    bare = Interpreter(print_fn=printed.append)
    assert bare.execute('button "Go"') is VOID


def test_failing_module_yields_void_and_logs(printed, caplog) -> None:
    interpreter = Interpreter(print_fn=printed.append, modules=[FailingModule()])
    with caplog.at_level(logging.WARNING, logger="azalea"):
        assert interpreter.execute('call broken write "x" say "after"') == Value.text("after")
    assert printed == ["after"]
    assert "Capability module 'broken' failed" in caplog.text


def test_file_module_through_language(tmp_path, printed) -> None:
    interpreter = Interpreter(print_fn=printed.append, modules=[FileModule(root=tmp_path)])
    assert interpreter.execute('call file write "out.txt" "saved"') == Value.boolean(True)
    assert interpreter.execute('call file read "out.txt"') == Value.text("saved")


def test_registered_module_names_are_known_to_the_parser(printed) -> None:
    recorder = RecordingModule()
    recorder.name = "store"
    interpreter = Interpreter(print_fn=printed.append)
    interpreter.register_module(recorder)
    interpreter.execute("call store put 1")
    assert recorder.calls == [("put", ["1"])]


def test_host_recursion_error_yields_void(printed, caplog) -> None:
    interpreter = Interpreter(print_fn=printed.append)
    source = "if 1 do " * 5000 + "say 1" + " end" * 5000
    with caplog.at_level(logging.ERROR, logger="azalea"):
        assert interpreter.execute(source) is VOID
    assert "recursion limit" in caplog.text
    assert interpreter.scopes.depth == 0


def test_print_goes_to_stdout_by_default(capsys) -> None:
    Interpreter().execute('say "out"')
    assert capsys.readouterr().out == "out\n"
