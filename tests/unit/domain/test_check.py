import re
import unittest

from best_practices_linter.domain.check import MATCH_ALL_FILES, Check
from best_practices_linter.domain.entities import EventKey, Phase, Violation
from best_practices_linter.domain.errors import InvalidDispatchStateError
from tests.unit.checker_test_utils import create_mock_node


class RecordingCheck(Check):
    """Records the order in which callbacks and handlers fire."""

    def __init__(self, debug: bool = False) -> None:
        super().__init__(debug=debug)
        self.calls: list[str] = []

    def visit_call(self, node) -> None:
        self.calls.append("visit_call")

    def leave_call(self, node) -> None:
        self.calls.append("leave_call")


RecordingCheck.add_callback(Phase.ENTER, "call", lambda check, node: check.calls.append("c1"))
RecordingCheck.add_callback(Phase.ENTER, "call", lambda check, node: check.calls.append("c2"))


class ErrorCheck(Check):
    def visit_call(self, node) -> None:
        self.add_error("msg")

    def leave_def(self, node) -> None:
        self.add_error("too long", line=99)


class TestCheckDispatch(unittest.TestCase):
    def test_callbacks_run_in_order_before_handler(self) -> None:
        """c1 then c2 run before visit_call."""
        check = RecordingCheck()
        check.on_enter(create_mock_node("call"))
        self.assertEqual(check.calls, ["c1", "c2", "visit_call"])

    def test_leave_runs_leave_handler_only(self) -> None:
        check = RecordingCheck()
        check.on_leave(create_mock_node("call"))
        self.assertEqual(check.calls, ["leave_call"])

    def test_unhandled_kind_is_a_no_op(self) -> None:
        check = ErrorCheck()
        check.on_enter(create_mock_node("while"))
        check.on_leave(create_mock_node("while"))
        self.assertEqual(check.errors, ())

    def test_handler_table_built_at_class_creation(self) -> None:
        self.assertIn(EventKey(Phase.ENTER, "call"), ErrorCheck.handlers)
        self.assertIn(EventKey(Phase.LEAVE, "def"), ErrorCheck.handlers)
        self.assertNotIn(EventKey(Phase.ENTER, "def"), ErrorCheck.handlers)

    def test_registries_are_per_class(self) -> None:
        self.assertEqual(len(RecordingCheck.registry), 2)
        self.assertEqual(len(ErrorCheck.registry), 0)
        self.assertEqual(len(Check.registry), 0)

    def test_subclass_inherits_parent_callbacks(self) -> None:
        class Child(RecordingCheck):
            pass

        check = Child()
        check.on_enter(create_mock_node("call"))
        self.assertEqual(check.calls, ["c1", "c2", "visit_call"])

    def test_debug_logs_unhandled_enter(self) -> None:
        check = ErrorCheck(debug=True)
        with self.assertLogs("best_practices_linter.domain.check", level="INFO") as logs:
            check.on_enter(create_mock_node("while", line=4))
        self.assertIn("no handler for while node at app/models/user.py:4", logs.output[0])

    def test_debug_is_silent_on_leave(self) -> None:
        check = ErrorCheck(debug=True)
        with self.assertNoLogs("best_practices_linter.domain.check", level="INFO"):
            check.on_leave(create_mock_node("while"))

    def test_exception_in_handler_names_check_and_kind(self) -> None:
        class Broken(Check):
            def visit_call(self, node) -> None:
                raise ValueError("boom")

        with self.assertRaises(ValueError) as ctx:
            Broken().on_enter(create_mock_node("call", line=3))
        self.assertIn("while dispatching enter of 'call' (app/models/user.py:3) to Broken", ctx.exception.__notes__)

    def test_static_and_class_method_handlers(self) -> None:
        seen = []

        class Decorated(Check):
            @staticmethod
            def visit_call(node) -> None:
                seen.append(("static", node.kind))

            @classmethod
            def leave_call(cls, node) -> None:
                seen.append((cls.__name__, node.kind))

        check = Decorated()
        node = create_mock_node("call")
        check.on_enter(node)
        check.on_leave(node)
        self.assertEqual(seen, [("static", "call"), ("Decorated", "call")])

    def test_handler_table_holds_method_names(self) -> None:
        self.assertEqual(ErrorCheck.handlers[EventKey(Phase.ENTER, "call")], "visit_call")

    def test_current_node_only_set_during_dispatch(self) -> None:
        seen = []

        class Spy(Check):
            def visit_call(self, node) -> None:
                seen.append(self.current_node)

        check = Spy()
        node = create_mock_node("call")
        check.on_enter(node)
        self.assertEqual(seen, [node])
        self.assertIsNone(check.current_node)


class TestCheckErrors(unittest.TestCase):
    def test_add_error_defaults_to_active_node(self) -> None:
        check = ErrorCheck()
        check.on_enter(create_mock_node("call", file="app/models/user.rb", line=12))
        self.assertEqual(
            check.errors[-1],
            Violation(file="app/models/user.rb", line=12, message="msg", reference_url=""),
        )

    def test_add_error_keeps_previous_violations(self) -> None:
        check = ErrorCheck()
        check.on_enter(create_mock_node("call", line=1))
        first = check.errors[0]
        check.on_leave(create_mock_node("def", line=2))
        self.assertEqual(len(check.errors), 2)
        self.assertIs(check.errors[0], first)
        self.assertEqual(check.errors[1].line, 99)
        self.assertEqual(check.errors[1].message, "too long")

    def test_add_error_outside_dispatch_fails(self) -> None:
        check = ErrorCheck()
        with self.assertRaises(InvalidDispatchStateError) as ctx:
            check.add_error("msg")
        self.assertIn("ErrorCheck", str(ctx.exception))
        self.assertEqual(check.errors, ())

    def test_add_error_uses_reference_url(self) -> None:
        class Documented(Check):
            def reference_url(self) -> str:
                return "https://example.com/rule"

            def visit_call(self, node) -> None:
                self.add_error("msg")

        check = Documented()
        check.on_enter(create_mock_node("call"))
        self.assertEqual(check.errors[0].reference_url, "https://example.com/rule")

    def test_errors_cannot_be_mutated(self) -> None:
        check = ErrorCheck()
        self.assertIsInstance(check.errors, tuple)


class TestCheckApplicability(unittest.TestCase):
    def test_defaults(self) -> None:
        check = Check()
        self.assertEqual(check.interesting_node_kinds(), frozenset())
        self.assertIs(check.interesting_files(), MATCH_ALL_FILES)
        self.assertTrue(check.interesting_files().search("any/path/at_all.py"))
        self.assertEqual(check.reference_url(), "")

    def test_is_interested_in_handlers_callbacks_and_declared_kinds(self) -> None:
        class Declared(Check):
            def interesting_node_kinds(self) -> frozenset[str]:
                return frozenset({"if"})

            def interesting_files(self) -> re.Pattern[str]:
                return re.compile(r"\.py$")

        self.assertTrue(Declared().is_interested_in("if"))
        self.assertFalse(Declared().is_interested_in("call"))
        self.assertTrue(ErrorCheck().is_interested_in("def"))
        self.assertTrue(RecordingCheck().is_interested_in("call"))
        self.assertFalse(Check().is_interested_in("call"))
