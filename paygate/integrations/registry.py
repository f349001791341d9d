"""
Action registry.

Fixed mapping from action name to endpoint, encoding and normalization rule.
Built once at import; building fails fast on a malformed descriptor so a bad
entry never surfaces as a runtime guess. The mapping is read-only afterwards.

Action names are "<group>.<kind>", e.g. "tappay.refund". Group dispatch
(`tappay_action`, `atm_action`, `platform_action`) resolves "<group>.<action>".
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from paygate.error_handler import RegistryConfigurationError
from paygate.integrations.contracts.interfaces import ActionDescriptor, Encoding, HttpMethod, RuleKind
from paygate.integrations.policy.status_rules import RULES

logger = logging.getLogger(__name__)

GET, POST = HttpMethod.GET, HttpMethod.POST


def _action(group: str, kind: str, method: HttpMethod, path: str, encoding: Encoding, rule: RuleKind) -> ActionDescriptor:
    return ActionDescriptor(
        name=f"{group}.{kind}",
        method=method,
        path=path,
        encoding=encoding,
        rule=rule,
        group=group,
        kind=kind,
    )


# ---------------------------------------------------------------------------
# Endpoint definitions
# ---------------------------------------------------------------------------

_DESCRIPTORS = (
    # -- Gateway (TapPay) actions --
    _action("tappay", "payByPrime", POST, "/tappay/api/pay-by-prime", Encoding.JSON, RuleKind.STATUS_ZERO),
    _action("tappay", "payByToken", POST, "/tappay/api/pay-by-token", Encoding.JSON, RuleKind.STATUS_ZERO),
    _action("tappay", "bind", POST, "/tappay/api/card/bind", Encoding.JSON, RuleKind.STATUS_ZERO),
    _action("tappay", "remove", POST, "/tappay/api/card/remove", Encoding.JSON, RuleKind.STATUS_ZERO),
    _action("tappay", "history", POST, "/tappay/api/transaction/history", Encoding.JSON, RuleKind.STATUS_ZERO),
    _action("tappay", "refund", POST, "/tappay/api/transaction/refund", Encoding.JSON, RuleKind.STATUS_ZERO),
    _action("tappay", "query", POST, "/tappay/api/transaction/query", Encoding.JSON, RuleKind.STATUS_TWO),
    # -- ATM actions --
    _action("atm", "payByPrime", POST, "/atm/api/pay-by-prime", Encoding.JSON, RuleKind.STATUS_ZERO_OR_TWO),
    _action("atm", "record", POST, "/atm/api/record", Encoding.JSON, RuleKind.STATUS_ZERO_OR_TWO),
    _action("atm", "tradeHistory", POST, "/atm/api/trade-history", Encoding.JSON, RuleKind.STATUS_ZERO_OR_TWO),
    _action("atm", "reconciliation", POST, "/atm/api/reconciliation", Encoding.JSON, RuleKind.STATUS_ZERO_OR_TWO),
    _action("atm", "simulatePaid", POST, "/atm/api/simulate-paid", Encoding.JSON, RuleKind.STATUS_ZERO_OR_TWO),
    # -- Platform card / payment actions --
    _action("platform", "bindCard", POST, "/platform/api/card/bind", Encoding.FORM, RuleKind.STATUS_ZERO),
    _action("platform", "payByPrime", POST, "/platform/api/pay-by-prime", Encoding.FORM, RuleKind.STATUS_ZERO),
    _action("platform", "payByToken", POST, "/platform/api/pay-by-token", Encoding.FORM, RuleKind.STATUS_ZERO),
    # -- Merchant onboarding --
    _action("merchant", "create", POST, "/merchant/api/create", Encoding.FORM, RuleKind.STATUS_ZERO),
    _action("merchant", "uploadQualification", POST, "/merchant/api/qualification/upload", Encoding.MULTIPART, RuleKind.HTTP_200_PASSTHROUGH),
    # -- Currency lookup --
    _action("currency", "exchangeRate", GET, "/currency/api/exchangerate", Encoding.QUERY, RuleKind.HTTP_200_PASSTHROUGH),
    # -- Orders / redirect payments / virtual accounts --
    _action("payment", "create", POST, "/payment/api/create", Encoding.JSON, RuleKind.OK_BOOLEAN),
    _action("payment", "redirectCreate", POST, "/payment/api/third-party/create", Encoding.JSON, RuleKind.SUCCESS_BOOLEAN),
    _action("payment", "virtualAccountWebhook", POST, "/payment/api/virtualaccount/webhook", Encoding.XML, RuleKind.RAW_TEXT),
)

UPLOAD_ACTION = "merchant.uploadQualification"


def _validate(descriptor: ActionDescriptor) -> None:
    if not isinstance(descriptor.rule, RuleKind) or descriptor.rule not in RULES:
        raise RegistryConfigurationError(f"Action '{descriptor.name}' does not declare a known normalization rule.")
    if not isinstance(descriptor.encoding, Encoding):
        raise RegistryConfigurationError(f"Action '{descriptor.name}' has unknown encoding {descriptor.encoding!r}.")
    if not isinstance(descriptor.method, HttpMethod):
        raise RegistryConfigurationError(f"Action '{descriptor.name}' has unknown method {descriptor.method!r}.")
    if not descriptor.path.startswith("/"):
        raise RegistryConfigurationError(f"Action '{descriptor.name}' path must start with '/': {descriptor.path!r}")
    if descriptor.encoding is Encoding.QUERY and descriptor.method is not HttpMethod.GET:
        raise RegistryConfigurationError(f"Action '{descriptor.name}' uses QUERY encoding but is not GET.")
    if descriptor.encoding is not Encoding.QUERY and descriptor.method is HttpMethod.GET:
        raise RegistryConfigurationError(f"Action '{descriptor.name}' is GET but does not use QUERY encoding.")
    if descriptor.encoding is Encoding.MULTIPART and descriptor.rule is not RuleKind.HTTP_200_PASSTHROUGH:
        raise RegistryConfigurationError(f"Multipart action '{descriptor.name}' must use HTTP_200_PASSTHROUGH.")
    if descriptor.name != f"{descriptor.group}.{descriptor.kind}":
        raise RegistryConfigurationError(f"Action '{descriptor.name}' does not match '{descriptor.group}.{descriptor.kind}'.")


def build_registry(descriptors: Iterable[ActionDescriptor]) -> Mapping[str, ActionDescriptor]:
    registry: Dict[str, ActionDescriptor] = {}
    for descriptor in descriptors:
        _validate(descriptor)
        if descriptor.name in registry:
            raise RegistryConfigurationError(f"Duplicate action name '{descriptor.name}'.")
        registry[descriptor.name] = descriptor
    logger.debug("Built action registry with %d actions", len(registry))
    return MappingProxyType(registry)


ACTION_REGISTRY: Mapping[str, ActionDescriptor] = build_registry(_DESCRIPTORS)


def resolve(action_name: str, registry: Optional[Mapping[str, ActionDescriptor]] = None) -> Optional[ActionDescriptor]:
    """Exact, case-sensitive lookup. Returns None for unknown names."""
    if not isinstance(action_name, str):
        return None
    return (registry if registry is not None else ACTION_REGISTRY).get(action_name)


def resolve_in_group(group: str, action: str, registry: Optional[Mapping[str, ActionDescriptor]] = None) -> Optional[ActionDescriptor]:
    return resolve(f"{group}.{action}", registry)
