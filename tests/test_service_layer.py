from __future__ import annotations

import io
import math
import os
import unittest
from contextlib import redirect_stderr
from unittest.mock import patch

from pwscore.core import password_strength as lazy_password_strength
from pwscore.core.error_dialect import CONFIG_INVALID, INVALID_REQUEST, PwScoreError, format_error_text
from pwscore.core.matching import Omnimatcher
from pwscore.core.resources import ENV_FREQUENCY_LISTS, ENV_TRACE, ResourceConfig, build_resources
from pwscore.core.strength_service import StrengthRequest, password_strength, score_request


class StrengthServiceTests(unittest.TestCase):
    def test_empty_password(self) -> None:
        result = password_strength("")
        self.assertEqual(result.entropy, 0.0)
        self.assertEqual(result.value, 0)
        self.assertEqual(result.crack_time_display, "instant")
        self.assertEqual(result.match_sequence, ())

    def test_common_password_is_weak(self) -> None:
        result = password_strength("password")
        self.assertEqual(result.entropy, 0.0)
        self.assertEqual(result.value, 0)

    def test_lazy_package_wrapper(self) -> None:
        self.assertEqual(lazy_password_strength("password").entropy, 0.0)

    def test_appending_symbol_increases_crack_time(self) -> None:
        base = password_strength("PSabcdrvst2025")
        longer = password_strength("PSabcdrvst2025$")
        self.assertGreater(longer.crack_time, base.crack_time)

    def test_user_inputs_lower_the_score(self) -> None:
        without = password_strength("zebulonquartz")
        with_inputs = password_strength("zebulonquartz", ["zebulonquartz"])
        self.assertLess(with_inputs.entropy, without.entropy)
        self.assertEqual(with_inputs.entropy, 0.0)

    def test_emoji_passwords(self) -> None:
        passwords = (
            "\U0001f510Password123!",
            "Pass\U0001f510word123!",
            "Password123!\U0001f510",
            "\U0001f510Pass\U0001f510word\U0001f510",
            "\U0001f468\u200d\U0001f469\u200d\U0001f467family",
        )
        for password in passwords:
            with self.subTest(password=password):
                result = password_strength(password)
                self.assertTrue(math.isfinite(result.entropy))
                self.assertGreaterEqual(result.entropy, 0.0)
                self.assertEqual("".join(m.token for m in result.match_sequence), password)

    def test_calc_time_is_recorded(self) -> None:
        result = password_strength("correcthorsebatterystaple")
        self.assertGreaterEqual(result.calc_time, 0.0)

    def test_explicit_resources(self) -> None:
        resources = build_resources({"passwords": ["hunter2"]})
        result = password_strength("hunter2", resources=resources)
        self.assertEqual(result.entropy, 0.0)

    def test_shared_matcher(self) -> None:
        matcher = Omnimatcher(build_resources({"passwords": ["hunter2"]}))
        result = password_strength("hunter2", matcher=matcher)
        self.assertEqual(result.entropy, 0.0)
        self.assertEqual(result.match_sequence[0].pattern, "dictionary")

    def test_non_string_password_is_rejected(self) -> None:
        with self.assertRaises(PwScoreError) as ctx:
            score_request(StrengthRequest(password=b"secret"))  # type: ignore[arg-type]
        self.assertEqual(ctx.exception.code, INVALID_REQUEST)
        self.assertEqual(format_error_text(ctx.exception), "invalid_request: password must be a string")

    def test_non_string_user_input_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "user inputs must be strings"):
            password_strength("secret", [7])  # type: ignore[list-item]


class ReferenceScoreTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch.dict(os.environ, {ENV_FREQUENCY_LISTS: ""})
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_easy_password(self) -> None:
        self.assertEqual(password_strength("easy password").value, 0)

    def test_easy_password2(self) -> None:
        result = password_strength("easy password2")
        self.assertEqual(result.value, 1)
        self.assertAlmostEqual(result.entropy, 21.011, delta=0.001)
        self.assertEqual(
            [(m.pattern, m.token) for m in result.match_sequence],
            [("dictionary", "easy"), ("bruteforce", " "), ("dictionary", "password"), ("bruteforce", "2")],
        )

    def test_long_mixed_password(self) -> None:
        result = password_strength("dkgit dldig394595 &&(3")
        self.assertEqual(result.value, 4)
        self.assertAlmostEqual(result.entropy, 100.877, delta=0.001)
        self.assertEqual(
            [m.token for m in result.match_sequence if m.pattern != "bruteforce"],
            ["it", "dig", "394595"],
        )


class TraceConfigTests(unittest.TestCase):
    def test_trace_writes_metadata_only(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            score_request(StrengthRequest(password="hunter2secret"), config=ResourceConfig(trace=True))
        text = stderr.getvalue()
        self.assertIn("pwscore: length=13 ", text)
        self.assertNotIn("hunter2secret", text)

    def test_trace_is_off_by_default(self) -> None:
        stderr = io.StringIO()
        with patch.dict(os.environ, {ENV_TRACE: ""}), redirect_stderr(stderr):
            password_strength("hunter2secret")
        self.assertEqual(stderr.getvalue(), "")

    def test_trace_env_flag(self) -> None:
        self.assertTrue(ResourceConfig.from_env({ENV_TRACE: "yes"}).trace)
        self.assertFalse(ResourceConfig.from_env({}).trace)

    def test_invalid_trace_flag(self) -> None:
        with self.assertRaises(PwScoreError) as ctx:
            ResourceConfig.from_env({ENV_TRACE: "maybe"})
        self.assertEqual(ctx.exception.code, CONFIG_INVALID)

    def test_frequency_list_path_from_env(self) -> None:
        config = ResourceConfig.from_env({"PWSCORE_FREQUENCY_LISTS": "  lists.json "})
        self.assertEqual(config.frequency_lists_path, "lists.json")


if __name__ == "__main__":
    unittest.main()
