from __future__ import annotations

from dataclasses import dataclass, replace
import sys
import time
from typing import Iterable, Optional, Tuple

from pwscore.core.error_dialect import INVALID_REQUEST, make_error
from pwscore.core.matching import Omnimatcher, default_omnimatcher, omnimatcher_for
from pwscore.core.models import Score
from pwscore.core.resources import MatchResources, ResourceConfig
from pwscore.core.scoring import minimum_entropy_match_sequence


@dataclass(frozen=True)
class StrengthRequest:
    password: str
    user_inputs: Tuple[str, ...] = ()


def _validate_request(request: StrengthRequest) -> None:
    if not isinstance(request.password, str):
        raise make_error(INVALID_REQUEST, "password must be a string")
    for value in request.user_inputs:
        if not isinstance(value, str):
            raise make_error(INVALID_REQUEST, "user inputs must be strings")


def _trace(result: Score, match_count: int) -> None:
    # Metadata only: the password and its tokens are never written out.
    sys.stderr.write(
        f"pwscore: length={len(result.password)} matches={match_count} "
        f"entropy={result.entropy} score={result.value} calc_time={result.calc_time:.6f}\n"
    )


def score_request(
    request: StrengthRequest,
    *,
    matcher: Optional[Omnimatcher] = None,
    config: Optional[ResourceConfig] = None,
) -> Score:
    _validate_request(request)
    config = ResourceConfig.from_env() if config is None else config
    matcher = default_omnimatcher() if matcher is None else matcher

    started = time.perf_counter()
    matches = matcher.omnimatch(request.password, request.user_inputs)
    result = minimum_entropy_match_sequence(request.password, matches)
    result = replace(result, calc_time=time.perf_counter() - started)

    if config.trace:
        _trace(result, len(matches))
    return result


def password_strength(
    password: str,
    user_inputs: Iterable[str] = (),
    *,
    resources: Optional[MatchResources] = None,
    matcher: Optional[Omnimatcher] = None,
) -> Score:
    if matcher is None and resources is not None:
        matcher = omnimatcher_for(resources)
    return score_request(StrengthRequest(password=password, user_inputs=tuple(user_inputs)), matcher=matcher)
