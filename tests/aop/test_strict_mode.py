"""Tests for guard reporting — strict mode, configuration binding and log events."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from method_interceptor import Config, InterceptorSettings, MethodInterceptor
from method_interceptor.kernel.exceptions import (
    CallbackNotCallableException,
    GuardException,
    InvalidMemberNameException,
    MemberAlreadyExistsException,
    MemberNotCallableException,
    MemberNotInjectedException,
    MemberNotReadableException,
    TargetNotWritableException,
)


@pytest.fixture
def strict(person) -> MethodInterceptor:
    return MethodInterceptor(person, InterceptorSettings(strict=True))


class TestStrictMode:
    def test_missing_member_raises(self, strict) -> None:
        with pytest.raises(MemberNotCallableException) as exc_info:
            strict.after("not_existing", lambda v, o: v)

        assert exc_info.value.code == "INTERCEPTOR_001"
        assert exc_info.value.context == {"operation": "after", "member": "not_existing"}

    def test_invalid_callback_raises(self, strict, person) -> None:
        with pytest.raises(CallbackNotCallableException):
            strict.wrap("get_name", None)

        assert person.get_name() == "john"

    def test_existing_member_raises_on_inject(self, strict) -> None:
        with pytest.raises(MemberAlreadyExistsException):
            strict.inject("id", lambda: 1)

    def test_existing_member_raises_on_property(self, strict) -> None:
        with pytest.raises(MemberAlreadyExistsException):
            strict.property("get_name", "value")

    def test_detach_of_original_raises(self, strict) -> None:
        with pytest.raises(MemberNotInjectedException) as exc_info:
            strict.detach("get_name")

        assert exc_info.value.operation == "detach"

    def test_invalid_property_name_raises(self, strict) -> None:
        with pytest.raises(InvalidMemberNameException):
            strict.property(None, "value")

    def test_unwritable_target_raises_with_cause(self) -> None:
        class Frozen:
            __slots__ = ()

            def run(self):
                return 1

        strict = MethodInterceptor(Frozen(), InterceptorSettings(strict=True))

        with pytest.raises(TargetNotWritableException) as exc_info:
            strict.before("run", lambda o: None)

        assert isinstance(exc_info.value.__cause__, AttributeError)

    def test_raising_getter_raises_with_cause(self) -> None:
        class Lazy:
            @property
            def heavy(self):
                raise RuntimeError("not loaded")

        strict = MethodInterceptor(Lazy(), InterceptorSettings(strict=True))

        with pytest.raises(MemberNotReadableException) as exc_info:
            strict.inject("heavy", lambda: 1)

        assert exc_info.value.code == "INTERCEPTOR_007"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_all_guard_errors_share_a_base(self, strict) -> None:
        with pytest.raises(GuardException):
            strict.conditional("id", lambda a, o: True)

    def test_valid_operations_do_not_raise(self, strict, person) -> None:
        strict.both("get_name", lambda o: None, lambda v, o: v + " smith").inject("say_hello", lambda: "hi")

        assert person.get_name() == "john smith"
        assert person.say_hello() == "hi"


class TestSettingsSources:
    def test_defaults_are_permissive(self, interceptor) -> None:
        assert interceptor.settings.strict is False
        assert interceptor.settings.log_decorations is True

    def test_settings_bound_from_config(self, person) -> None:
        config = Config({"interceptor": {"strict": True}})

        interceptor = MethodInterceptor(person, config=config)

        assert interceptor.settings.strict is True
        with pytest.raises(MemberNotCallableException):
            interceptor.after("missing", lambda v, o: v)

    def test_env_var_enables_strict_mode(self, person, monkeypatch) -> None:
        monkeypatch.setenv("INTERCEPTOR_STRICT", "true")

        interceptor = MethodInterceptor(person, config=Config({}))

        assert interceptor.settings.strict is True

    def test_env_var_applies_without_config(self, person, monkeypatch) -> None:
        monkeypatch.setenv("INTERCEPTOR_STRICT", "true")

        interceptor = MethodInterceptor(person)

        assert interceptor.settings.strict is True
        with pytest.raises(MemberNotCallableException):
            interceptor.after("missing", lambda v, o: v)

    def test_explicit_settings_win_over_config(self, person) -> None:
        config = Config({"interceptor": {"strict": True}})

        interceptor = MethodInterceptor(person, InterceptorSettings(), config=config)

        assert interceptor.settings.strict is False


class TestLogEvents:
    def test_skipped_guard_is_logged(self, interceptor) -> None:
        with capture_logs() as logs:
            interceptor.after("not_existing", lambda v, o: v)

        assert logs == [
            {
                "event": "decoration_skipped",
                "log_level": "debug",
                "target": "Person",
                "operation": "after",
                "member": "not_existing",
                "code": "INTERCEPTOR_001",
                "reason": "Member 'not_existing' is not a callable",
            }
        ]

    def test_applied_operations_are_logged(self, interceptor) -> None:
        with capture_logs() as logs:
            interceptor.after("get_name", lambda v, o: v).inject("hi", lambda: 1).detach("hi").property("x", 1)

        assert [entry["event"] for entry in logs] == [
            "member_decorated",
            "member_injected",
            "member_detached",
            "property_added",
        ]

    def test_decoration_events_can_be_silenced(self, person) -> None:
        interceptor = MethodInterceptor(person, InterceptorSettings(log_decorations=False))

        with capture_logs() as logs:
            interceptor.after("get_name", lambda v, o: v).after("missing", lambda v, o: v)

        assert [entry["event"] for entry in logs] == ["decoration_skipped"]
