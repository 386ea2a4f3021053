"""Unit tests for OtpIssuer and OtpVerifier."""

import re

import pytest

from errors import (
    ExpiredOrInvalidOtpError,
    IncorrectOtpError,
    TooManyFailuresError,
    TransportError,
)
from services.otp import (
    BlockReason,
    OtpIssuer,
    OtpPolicy,
    OtpVerifier,
    TEMPLATE_USER_ACTIVATION,
    VerificationResult,
)

EMAIL = "a@x.com"


# ── OtpIssuer ─────────────────────────────────────────────────────────────────


class TestOtpIssuer:
    async def test_sends_then_records(self, issuer, notifier, store):
        code = await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        assert code == "482913"
        notifier.send.assert_awaited_once_with(
            EMAIL,
            "Verify your email",
            "user-activation-mail",
            {"name": "Alice", "otp": "482913"},
        )
        assert await store.get(f"otp:{EMAIL}") == "482913"
        assert store.ttl(f"otp:{EMAIL}") == 300
        assert await store.get(f"otp_cooldown:{EMAIL}") == "true"
        assert store.ttl(f"otp_cooldown:{EMAIL}") == 60

    async def test_default_code_is_six_digits(self, store, notifier):
        code = await OtpIssuer(store, notifier).issue("Alice", EMAIL, "forgot-password")
        assert re.fullmatch(r"[1-9]\d{5}", code)

    async def test_transport_failure_writes_nothing(self, issuer, notifier, store):
        notifier.send.side_effect = TransportError("smtp down")
        with pytest.raises(TransportError):
            await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        assert await store.get(f"otp:{EMAIL}") is None
        assert await store.get(f"otp_cooldown:{EMAIL}") is None

    async def test_reissue_supersedes_previous_code(self, issuer, store, clock):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        clock.advance(61)
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        assert await store.get(f"otp:{EMAIL}") == "555555"

    async def test_cooldown_blocks_while_otp_still_live(self, issuer, guard, store, clock):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        clock.advance(30)
        outcome = await guard.check_restrictions(EMAIL)
        assert outcome.reason is BlockReason.COOLDOWN
        assert await store.get(f"otp:{EMAIL}") is not None

    async def test_otp_expires_after_five_minutes(self, issuer, store, clock):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        clock.advance(300)
        assert await store.get(f"otp:{EMAIL}") is None


# ── OtpVerifier ───────────────────────────────────────────────────────────────


class TestOtpVerifier:
    async def test_missing_record_is_expired_or_invalid(self, verifier, store):
        with pytest.raises(ExpiredOrInvalidOtpError):
            await verifier.verify(EMAIL, "123456")
        assert await store.get(f"otp_attempts:{EMAIL}") is None

    async def test_correct_code_verifies_and_clears(self, issuer, verifier, store):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        await store.set(f"otp_attempts:{EMAIL}", "1", 300)

        result = await verifier.verify(EMAIL, "482913")

        assert result == VerificationResult(email=EMAIL, verified=True)
        assert await store.get(f"otp:{EMAIL}") is None
        assert await store.get(f"otp_attempts:{EMAIL}") is None

    async def test_code_is_single_use(self, issuer, verifier):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        await verifier.verify(EMAIL, "482913")
        with pytest.raises(ExpiredOrInvalidOtpError):
            await verifier.verify(EMAIL, "482913")

    async def test_wrong_codes_escalate_to_lock(self, issuer, verifier, store, guard):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)

        with pytest.raises(IncorrectOtpError) as first:
            await verifier.verify(EMAIL, "111111")
        assert first.value.attempts_remaining == 1

        with pytest.raises(IncorrectOtpError) as second:
            await verifier.verify(EMAIL, "111111")
        assert second.value.attempts_remaining == 0

        with pytest.raises(TooManyFailuresError):
            await verifier.verify(EMAIL, "111111")

        with pytest.raises(ExpiredOrInvalidOtpError):
            await verifier.verify(EMAIL, "482913")

        assert await store.get(f"otp_attempts:{EMAIL}") is None
        assert store.ttl(f"otp_lock:{EMAIL}") == 1800
        assert (await guard.check_restrictions(EMAIL)).reason is BlockReason.ACCOUNT_LOCKED

    async def test_account_lock_expires(self, issuer, verifier, guard, clock):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        for _ in range(2):
            with pytest.raises(IncorrectOtpError):
                await verifier.verify(EMAIL, "000000")
        with pytest.raises(TooManyFailuresError):
            await verifier.verify(EMAIL, "000000")

        clock.advance(1799)
        assert (await guard.check_restrictions(EMAIL)).reason is BlockReason.ACCOUNT_LOCKED
        clock.advance(1)
        assert (await guard.check_restrictions(EMAIL)).allowed

    async def test_correct_code_after_one_failure(self, issuer, verifier, store):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        with pytest.raises(IncorrectOtpError):
            await verifier.verify(EMAIL, "111111")
        result = await verifier.verify(EMAIL, "482913")
        assert result.verified
        assert await store.get(f"otp_attempts:{EMAIL}") is None

    async def test_attempt_counter_ttl_restarts_on_each_failure(self, issuer, verifier, store, clock):
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        clock.advance(200)
        with pytest.raises(IncorrectOtpError):
            await verifier.verify(EMAIL, "111111")
        assert store.ttl(f"otp_attempts:{EMAIL}") == 300

    async def test_leading_zero_code_compared_as_string(self, store, notifier):
        issuer = OtpIssuer(store, notifier, code_factory=lambda: "012345")
        verifier = OtpVerifier(store)
        await issuer.issue("Alice", EMAIL, TEMPLATE_USER_ACTIVATION)
        with pytest.raises(IncorrectOtpError):
            await verifier.verify(EMAIL, "12345")
        assert (await verifier.verify(EMAIL, "012345")).verified

    async def test_custom_failure_threshold(self, store, notifier):
        policy = OtpPolicy(max_failed_attempts=0, account_lock_ttl=5)
        await OtpIssuer(store, notifier, policy, code_factory=lambda: "999999").issue(
            "Alice", EMAIL, TEMPLATE_USER_ACTIVATION
        )
        with pytest.raises(TooManyFailuresError):
            await OtpVerifier(store, policy).verify(EMAIL, "111111")
        assert store.ttl(f"otp_lock:{EMAIL}") == 5
