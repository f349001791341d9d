"""
Payment Gateway HTTP Client.

Purpose:
- Single entry point for every call to the remote payment gateway
- Resolves an action name through the fixed registry, sends one request,
  and returns a NormalizedResult (success/status 1, or failure/status 0)

Usage:
- `await client.dispatch("tappay.refund", {...})` for generic calls
- `await client.tappay_action({"action": "refund", ...})` for the
  action-in-params families (tappay, atm, platform)
- one coroutine per action (`refund`, `atm_record`, `get_exchange_rate`, ...)
- `await client.upload(files, partner_account, platform_key)` for qualifications

Important:
- Expected failures (unknown action, bad params, transport, decode, upstream
  rejection) are always returned as a failed NormalizedResult, never raised.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from paygate.error_handler import error_handler
from paygate.integrations.clients.real_http.transport import GatewayTransport, encoding_error
from paygate.integrations.contracts.interfaces import ActionDescriptor, Encoding, RequestEnvelope
from paygate.integrations.contracts.results import NormalizedResult
from paygate.integrations.contracts.uploads import FileRef, UploadSpec
from paygate.integrations.observability import GatewayEventHook, LoggingEventHook
from paygate.integrations.policy.status_rules import normalize_outcome
from paygate.integrations.registry import ACTION_REGISTRY, UPLOAD_ACTION, resolve, resolve_in_group
from paygate.integrations.uploads.orchestrator import UploadOrchestrator
from paygate.integrations.uploads.resolvers import (
    FileReferenceResolver,
    StoredPathResolver,
    UploadedFileResolver,
)
from paygate.utils.config_loader import DEFAULT_BASE_URL, GatewayConfig, load_gateway_config

logger = logging.getLogger(__name__)


def _without_none(**params: Any) -> Dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


class PaymentGatewayClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        resolver: Optional[FileReferenceResolver] = None,
        hook: Optional[GatewayEventHook] = None,
        transport: Optional[GatewayTransport] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.transport = transport or GatewayTransport(base_url, api_key=api_key, transport=http_transport)
        self.hook = hook or LoggingEventHook()
        self.registry: Mapping[str, ActionDescriptor] = ACTION_REGISTRY
        self.uploader = UploadOrchestrator(
            self.transport,
            resolver or UploadedFileResolver(),
            hook=self.hook,
            descriptor=self.registry[UPLOAD_ACTION],
        )

    @classmethod
    def from_config(cls, config: GatewayConfig, **kwargs: Any) -> "PaymentGatewayClient":
        if config.upload_root is not None and "resolver" not in kwargs:
            kwargs["resolver"] = StoredPathResolver(config.upload_root)
        return cls(base_url=config.base_url, api_key=config.api_key, **kwargs)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None, **kwargs: Any) -> "PaymentGatewayClient":
        return cls.from_config(load_gateway_config(env_file), **kwargs)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch(self, action_name: str, params: Optional[Mapping[str, Any]] = None) -> NormalizedResult:
        descriptor = resolve(action_name, self.registry)
        if descriptor is None:
            self.hook.validation_failed(str(action_name), "unsupported method")
            return error_handler.unsupported_action(str(action_name))
        return await self._send(descriptor, dict(params or {}))

    async def _send(self, descriptor: ActionDescriptor, params: Dict[str, Any]) -> NormalizedResult:
        if descriptor.encoding is Encoding.MULTIPART:
            self.hook.validation_failed(descriptor.name, "multipart action requires files")
            return error_handler.precondition_failure(f"{descriptor.name} requires files; use upload()")
        if descriptor.encoding is Encoding.XML and not isinstance(params.get("body"), str):
            self.hook.validation_failed(descriptor.name, "missing raw XML body")
            return error_handler.precondition_failure(f"{descriptor.name} requires a raw 'body' string")
        problem = encoding_error(descriptor.encoding, params)
        if problem is not None:
            self.hook.validation_failed(descriptor.name, "params cannot be encoded")
            return error_handler.precondition_failure(
                f"{descriptor.name} params cannot be encoded as {descriptor.encoding.value}: {problem}"
            )

        envelope = RequestEnvelope(action=descriptor.name, params=params)
        self.hook.request_built(envelope, descriptor)
        outcome = await self.transport.send(descriptor.method, descriptor.path, descriptor.encoding, envelope.params)
        self.hook.response_received(descriptor, outcome)
        return normalize_outcome(descriptor.name, descriptor.rule, outcome)

    async def _group_action(self, group: str, params: Optional[Mapping[str, Any]]) -> NormalizedResult:
        params = dict(params or {})
        action = params.pop("action", None)
        if not isinstance(action, str) or not action.strip():
            self.hook.validation_failed(f"{group}.<missing>", "missing or invalid action parameter")
            return error_handler.missing_group_action(group, action)

        descriptor = resolve_in_group(group, action, self.registry)
        if descriptor is None or descriptor.group != group:
            self.hook.validation_failed(f"{group}.{action}", "unsupported action")
            return error_handler.unsupported_action(action, method=False)
        return await self._send(descriptor, params)

    async def tappay_action(self, params: Mapping[str, Any]) -> NormalizedResult:
        return await self._group_action("tappay", params)

    async def atm_action(self, params: Mapping[str, Any]) -> NormalizedResult:
        return await self._group_action("atm", params)

    async def platform_action(self, params: Mapping[str, Any]) -> NormalizedResult:
        return await self._group_action("platform", params)

    async def upload(
        self,
        files: Mapping[str, FileRef],
        partner_account: str,
        platform_key: str,
    ) -> NormalizedResult:
        return await self.uploader.upload(
            UploadSpec(files=files, partner_account=partner_account, platform_key=platform_key)
        )

    # ------------------------------------------------------------------
    # Gateway (TapPay) actions
    # ------------------------------------------------------------------

    async def pay_by_prime(
        self,
        prime: str,
        amount: int,
        currency: str = "TWD",
        details: str = "",
        cardholder: Optional[Dict[str, Any]] = None,
        remember: bool = False,
        order_number: Optional[str] = None,
        **extra: Any,
    ) -> NormalizedResult:
        return await self.dispatch(
            "tappay.payByPrime",
            _without_none(
                prime=prime,
                amount=amount,
                currency=currency,
                details=details,
                cardholder=cardholder,
                remember=remember,
                order_number=order_number,
                **extra,
            ),
        )

    async def pay_by_token(
        self,
        card_key: str,
        card_token: str,
        amount: int,
        currency: str = "TWD",
        details: str = "",
        order_number: Optional[str] = None,
        **extra: Any,
    ) -> NormalizedResult:
        return await self.dispatch(
            "tappay.payByToken",
            _without_none(
                card_key=card_key,
                card_token=card_token,
                amount=amount,
                currency=currency,
                details=details,
                order_number=order_number,
                **extra,
            ),
        )

    async def bind_card(self, prime: str, cardholder: Dict[str, Any], currency: str = "TWD", **extra: Any) -> NormalizedResult:
        return await self.dispatch("tappay.bind", _without_none(prime=prime, cardholder=cardholder, currency=currency, **extra))

    async def remove_card(self, card_key: str, card_token: str, **extra: Any) -> NormalizedResult:
        return await self.dispatch("tappay.remove", _without_none(card_key=card_key, card_token=card_token, **extra))

    async def transaction_history(self, rec_trade_id: str, **extra: Any) -> NormalizedResult:
        return await self.dispatch("tappay.history", _without_none(rec_trade_id=rec_trade_id, **extra))

    async def refund(self, rec_trade_id: str, amount: Optional[int] = None, **extra: Any) -> NormalizedResult:
        return await self.dispatch("tappay.refund", _without_none(rec_trade_id=rec_trade_id, amount=amount, **extra))

    async def query_record(
        self,
        filters: Optional[Dict[str, Any]] = None,
        records_per_page: int = 50,
        page: int = 0,
        **extra: Any,
    ) -> NormalizedResult:
        return await self.dispatch(
            "tappay.query",
            _without_none(filters=filters, records_per_page=records_per_page, page=page, **extra),
        )

    # ------------------------------------------------------------------
    # ATM actions
    # ------------------------------------------------------------------

    async def atm_pay_by_prime(self, prime: str, amount: int, details: str = "", **extra: Any) -> NormalizedResult:
        return await self.dispatch("atm.payByPrime", _without_none(prime=prime, amount=amount, details=details, **extra))

    async def atm_record(self, **filters: Any) -> NormalizedResult:
        return await self.dispatch("atm.record", filters)

    async def atm_trade_history(self, rec_trade_id: str, **extra: Any) -> NormalizedResult:
        return await self.dispatch("atm.tradeHistory", _without_none(rec_trade_id=rec_trade_id, **extra))

    async def atm_reconciliation(self, start_date: str, end_date: str, **extra: Any) -> NormalizedResult:
        return await self.dispatch("atm.reconciliation", _without_none(start_date=start_date, end_date=end_date, **extra))

    async def atm_simulate_paid(self, rec_trade_id: str, **extra: Any) -> NormalizedResult:
        return await self.dispatch("atm.simulatePaid", _without_none(rec_trade_id=rec_trade_id, **extra))

    # ------------------------------------------------------------------
    # Platform card / payment actions
    # ------------------------------------------------------------------

    async def platform_bind_card(self, partner_account: str, prime: str, **extra: Any) -> NormalizedResult:
        return await self.dispatch("platform.bindCard", _without_none(partner_account=partner_account, prime=prime, **extra))

    async def platform_pay_by_prime(self, partner_account: str, prime: str, amount: int, **extra: Any) -> NormalizedResult:
        return await self.dispatch(
            "platform.payByPrime",
            _without_none(partner_account=partner_account, prime=prime, amount=amount, **extra),
        )

    async def platform_pay_by_token(
        self,
        partner_account: str,
        card_key: str,
        card_token: str,
        amount: int,
        **extra: Any,
    ) -> NormalizedResult:
        return await self.dispatch(
            "platform.payByToken",
            _without_none(
                partner_account=partner_account,
                card_key=card_key,
                card_token=card_token,
                amount=amount,
                **extra,
            ),
        )

    # ------------------------------------------------------------------
    # Merchant onboarding, currency, orders
    # ------------------------------------------------------------------

    async def create_merchant(self, partner_account: str, merchant_name: str, **extra: Any) -> NormalizedResult:
        return await self.dispatch(
            "merchant.create",
            _without_none(partner_account=partner_account, merchant_name=merchant_name, **extra),
        )

    async def get_exchange_rate(
        self,
        from_currency: str,
        to_currency: str,
        from_amount: float,
        type: str = "up",
        point: int = 3,
    ) -> NormalizedResult:
        return await self.dispatch(
            "currency.exchangeRate",
            {"from": from_currency, "to": to_currency, "from_amount": from_amount, "type": type, "point": point},
        )

    async def create_payment(self, params: Mapping[str, Any]) -> NormalizedResult:
        return await self.dispatch("payment.create", params)

    async def create_redirect_payment(self, params: Mapping[str, Any]) -> NormalizedResult:
        return await self.dispatch("payment.redirectCreate", params)

    async def virtual_account_webhook(self, raw_data: str) -> NormalizedResult:
        return await self.dispatch("payment.virtualAccountWebhook", {"body": raw_data})

    async def upload_qualification(
        self,
        files: Mapping[str, Union[str, Path, Any]],
        partner_account: str,
        platform_key: str,
    ) -> NormalizedResult:
        return await self.upload(files, partner_account, platform_key)
