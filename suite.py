import time
import traceback
from dataclasses import dataclass
from functools import wraps
from typing import List, Any, Callable, Optional, Type

PASS_FACE = '(^ ω ^)'
FAIL_FACE = '(ﾉಥДಥ)ﾉ'
SUMMARY_FACE = '☆*:.｡.o(≧▽≦)o.｡.:*☆'


class _c:
    """ansi color codes for the report."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


@dataclass
class _Case:
    func: Callable[[], Any]
    description: str


@dataclass
class _Outcome:
    description: str
    elapsed_ms: float
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None


_registered: List[_Case] = []


class TestAssertionError(AssertionError):
    """raised by the assert helpers so failures read differently from crashes."""
    __test__ = False


def test(description: str) -> Callable:
    """
    register a function as a test case. the function itself is returned
    (wrapped), so pytest still collects the same `test_*` names.
    """
    def decorator(func: Callable) -> Callable:
        _registered.append(_Case(func, description))

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


# test modules bind `test = suite.test`; keep pytest from collecting the decorator
test.__test__ = False


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise TestAssertionError(message)


def assert_raises(error_type: Type[BaseException], func: Callable[[], Any],
                  message: Optional[str] = None) -> BaseException:
    """call `func` and require it to raise `error_type`. returns the caught error."""
    try:
        func()
    except error_type as e:
        return e
    raise TestAssertionError(message or f"expected {error_type.__name__} to be raised")


def _execute(case: _Case, show_traceback: bool) -> _Outcome:
    started = time.perf_counter()
    error = None
    try:
        case.func()
    except TestAssertionError as e:
        error = f"assertion failed: {e}"
    except Exception as e:
        error = f"{type(e).__name__}: {e}"
        if show_traceback:
            traceback.print_exc()
    return _Outcome(case.description, (time.perf_counter() - started) * 1000, error)


def run(title: str = "test run", show_traceback: bool = False) -> bool:
    """run every registered case, print a report, and return True when all passed."""
    global _registered
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    started = time.perf_counter()

    outcomes = []
    for case in _registered:
        outcome = _execute(case, show_traceback)
        outcomes.append(outcome)
        timing = f"{_c.grey}({outcome.elapsed_ms:.1f}ms){_c.reset}"
        if outcome.passed:
            print(f"  {_c.ok}✔ pass{_c.reset}  {PASS_FACE}  {outcome.description} {timing}")
        else:
            print(f"  {_c.fail}✖ fail{_c.reset}  {FAIL_FACE}  {outcome.description} {timing}")
            print(f"    {_c.grey}└─> {outcome.error}{_c.reset}")

    failed = _report(outcomes, (time.perf_counter() - started) * 1000)
    # a script may register and run several suites in turn
    _registered = []
    return failed == 0


def _report(outcomes: List[_Outcome], duration_ms: float) -> int:
    failed = sum(1 for o in outcomes if not o.passed)
    color = _c.ok if failed == 0 else _c.fail

    print(f"\n{color}--- summary ---{_c.reset}")
    print(f"  {SUMMARY_FACE}  ran {_c.info}{len(outcomes)}{_c.reset} tests in {_c.warn}{duration_ms:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {len(outcomes) - failed}{_c.reset}, {_c.fail}failed: {failed}{_c.reset}")
    print(f"{color}---------------{_c.reset}\n")
    return failed
