"""Pattern matching, entropy scoring and service APIs for pwscore."""

from __future__ import annotations


def password_strength(password, user_inputs=()):
    from pwscore.core.strength_service import password_strength as _password_strength

    return _password_strength(password, user_inputs)


def omnimatch(password, user_inputs=()):
    from pwscore.core.matching import omnimatch as _omnimatch

    return _omnimatch(password, user_inputs)


__all__ = ["omnimatch", "password_strength"]
