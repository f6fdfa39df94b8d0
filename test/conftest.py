from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type, Union

import httpx
import pytest
from pydantic import BaseModel

from superai.agent_core.capabilities.base import CapabilityDescriptor
from superai.agent_core.completion.base import CapabilityRequest, CompletionResult

# Load dotenv files early so test fixtures can read secrets via os.getenv
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    load_dotenv(TEST_ROOT / ".env", override=False)
except Exception:
    pass


Reply = Union[str, CompletionResult, BaseException]


class StubCompletionService:
    """Deterministic ``CompletionService`` for tests.

    Replies are chosen per call by ``responder(call)`` where ``call`` is the
    recorded keyword arguments. A ``str`` becomes the reply text, a
    ``CompletionResult`` is returned as-is and an exception is raised.
    """

    def __init__(self, responder: Callable[[Dict[str, Any]], Reply]) -> None:
        self._responder = responder
        self.calls: List[Dict[str, Any]] = []

    async def complete(
        self,
        *,
        prompt: str,
        system_instruction: str,
        capabilities: Optional[Sequence[CapabilityDescriptor]] = None,
        response_schema: Optional[Type[BaseModel]] = None,
    ) -> CompletionResult:
        call = {
            "prompt": prompt,
            "system_instruction": system_instruction,
            "capabilities": capabilities,
            "response_schema": response_schema,
        }
        self.calls.append(call)
        reply = self._responder(call)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, CompletionResult):
            return reply
        return CompletionResult(text=reply)


def plan_json(*steps: tuple[str, str]) -> str:
    return json.dumps({"steps": [{"description": d, "assignedAgent": a} for d, a in steps]})


def scripted_completion(
    plan: str,
    *,
    results: Optional[Dict[str, Reply]] = None,
    evaluation: Union[str, Callable[[Dict[str, Any]], Reply]] = '{"success": true, "reason": "ok"}',
) -> StubCompletionService:
    """Stub answering planning, evaluation and step calls separately.

    ``results`` maps a step description (the prompt) to the worker's reply;
    unmapped steps get ``"done: <description>"``.
    """
    from superai.agent_core.planning.steps import Evaluation, Plan

    results = results or {}

    def responder(call: Dict[str, Any]) -> Reply:
        schema = call["response_schema"]
        if schema is Plan:
            return plan
        if schema is Evaluation:
            return evaluation(call) if callable(evaluation) else evaluation
        return results.get(call["prompt"], f"done: {call['prompt']}")

    return StubCompletionService(responder)


def capability_reply(text: str, *requests: tuple[str, Dict[str, Any]]) -> CompletionResult:
    return CompletionResult(
        text=text,
        capability_requests=[CapabilityRequest(name=name, args=args) for name, args in requests],
    )


@pytest.fixture
def stub_service() -> Type[StubCompletionService]:
    return StubCompletionService


@pytest.fixture
def scripted() -> Callable[..., StubCompletionService]:
    return scripted_completion


@pytest.fixture
def make_plan() -> Callable[..., str]:
    return plan_json


@pytest.fixture
def make_reply() -> Callable[..., CompletionResult]:
    return capability_reply


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
    )

    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)
