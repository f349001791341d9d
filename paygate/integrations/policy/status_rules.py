"""
Status normalization rules.

The gateway does not share one status vocabulary across endpoints: the same
`status` field means success at 0 for card/payment actions, at 2 for record
queries, at 0 or 2 for ATM actions, while order creation and redirect
payments answer with boolean `ok` / `success` flags and uploads only signal
through the HTTP status line. Each variant is a pure function keyed by
RuleKind; the registry binds every action to exactly one of them.
"""

from __future__ import annotations

import re
from typing import Any, Callable, FrozenSet, Mapping, Optional

from paygate.error_handler import error_handler
from paygate.integrations.contracts.interfaces import DecodedBody, RawOutcome, RuleKind
from paygate.integrations.contracts.results import NormalizedResult
from paygate.integrations.policy.decoder import decode

RuleFn = Callable[[str, Optional[int], DecodedBody], NormalizedResult]

# ASCII only: str.isdigit() also accepts "²" and "٠"
_INTEGER_TEXT = re.compile(r"-?[0-9]+")


def normalize_outcome(action_name: str, rule: RuleKind, outcome: RawOutcome) -> NormalizedResult:
    """Transport outcome -> decoded body -> rule. Total over every outcome."""
    if outcome.failed:
        return error_handler.transport_failure(action_name, outcome.transport_error)
    return normalize(action_name, rule, outcome.http_status, decode(outcome.body))


def normalize(
    action_name: str,
    rule: RuleKind,
    http_status: Optional[int],
    decoded: DecodedBody,
) -> NormalizedResult:
    try:
        rule_fn = RULES[rule]
    except KeyError:
        # Registry build rejects these; reaching here means a hand-built descriptor.
        return error_handler.unsupported_action(action_name)
    return rule_fn(action_name, http_status, decoded)


# ---------------------------------------------------------------------------
# Status-field rules
# ---------------------------------------------------------------------------

def _coerce_status(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_TEXT.fullmatch(text):
            return int(text)
    return None


def _status_rule(accepted: FrozenSet[int]) -> RuleFn:
    def rule(action_name: str, http_status: Optional[int], decoded: DecodedBody) -> NormalizedResult:
        if not decoded.ok:
            return error_handler.decode_failure(action_name, decoded.decode_error, decoded.raw_text)
        body = decoded.data
        status = _coerce_status(body.get("status")) if isinstance(body, dict) else None
        if status is not None and status in accepted:
            return NormalizedResult.succeeded(payload=dict(body))
        return error_handler.upstream_failure(action_name, body)

    return rule


def _flag_rule(flag: str) -> RuleFn:
    def rule(action_name: str, http_status: Optional[int], decoded: DecodedBody) -> NormalizedResult:
        if not decoded.ok:
            return error_handler.decode_failure(action_name, decoded.decode_error, decoded.raw_text)
        body = decoded.data
        if isinstance(body, dict) and body.get(flag) is True:
            return NormalizedResult.succeeded(payload=dict(body))
        return error_handler.upstream_failure(action_name, body)

    return rule


# ---------------------------------------------------------------------------
# HTTP-status rules
# ---------------------------------------------------------------------------

def _http_200_passthrough(action_name: str, http_status: Optional[int], decoded: DecodedBody) -> NormalizedResult:
    if http_status != 200:
        return error_handler.http_failure(action_name, http_status, decoded.raw_text)
    if not decoded.ok:
        return error_handler.decode_failure(action_name, decoded.decode_error, decoded.raw_text)
    body = decoded.data
    return NormalizedResult.succeeded(payload=body if isinstance(body, dict) else {"data": body})


def _raw_text(action_name: str, http_status: Optional[int], decoded: DecodedBody) -> NormalizedResult:
    if http_status is None or not 200 <= http_status < 300:
        return error_handler.http_failure(action_name, http_status, decoded.raw_text)
    return NormalizedResult.succeeded(payload={"body": decoded.raw_text})


RULES: Mapping[RuleKind, RuleFn] = {
    RuleKind.STATUS_ZERO: _status_rule(frozenset({0})),
    RuleKind.STATUS_TWO: _status_rule(frozenset({2})),
    RuleKind.STATUS_ZERO_OR_TWO: _status_rule(frozenset({0, 2})),
    RuleKind.OK_BOOLEAN: _flag_rule("ok"),
    RuleKind.SUCCESS_BOOLEAN: _flag_rule("success"),
    RuleKind.HTTP_200_PASSTHROUGH: _http_200_passthrough,
    RuleKind.RAW_TEXT: _raw_text,
}
