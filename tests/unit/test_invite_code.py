"""Tests for invite code generation and normalisation."""

import random

import pytest
from hypothesis import given, strategies as st

from wedding_planner_api.app.core.errors import CodeSpaceExhaustedError
from wedding_planner_api.app.services.invite_code import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    InviteCodeGenerator,
    is_valid_invite_code,
    normalize_invite_code,
)


class TestDraw:
    @given(st.randoms(use_true_random=False))
    def test_codes_are_eight_uppercase_alphanumerics(self, rnd: random.Random):
        code = InviteCodeGenerator(lambda _: False, choice=rnd.choice).draw()
        assert len(code) == INVITE_CODE_LENGTH
        assert all(ch in INVITE_CODE_ALPHABET for ch in code)
        assert is_valid_invite_code(code)

    def test_default_source_is_secrets(self):
        code = InviteCodeGenerator(lambda _: False).generate()
        assert is_valid_invite_code(code)


class TestGenerate:
    def test_redraws_on_collision(self):
        taken = {"AAAAAAAA"}
        letters = iter("A" * 8 + "B" * 8)
        generator = InviteCodeGenerator(taken.__contains__, choice=lambda _: next(letters))
        assert generator.generate() == "BBBBBBBB"

    def test_gives_up_after_max_attempts(self):
        checked = []

        def always_taken(code: str) -> bool:
            checked.append(code)
            return True

        generator = InviteCodeGenerator(always_taken, max_attempts=4)
        with pytest.raises(CodeSpaceExhaustedError):
            generator.generate()
        assert len(checked) == 4

    def test_max_attempts_is_at_least_one(self):
        assert InviteCodeGenerator(lambda _: False, max_attempts=-3).max_attempts == 1


class TestNormalize:
    @pytest.mark.parametrize("raw", ["abcd1234", " ABCD1234 ", "AbCd1234\n"])
    def test_case_and_whitespace_insensitive(self, raw):
        assert normalize_invite_code(raw) == "ABCD1234"

    @pytest.mark.parametrize("code", ["ABC", "ABCD12345", "ABCD-123", "abcd1234"])
    def test_invalid_codes(self, code):
        assert not is_valid_invite_code(code)
