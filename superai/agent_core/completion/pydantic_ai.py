"""Pydantic AI completion backend.

``PydanticAICompletionService`` implements ``CompletionService`` on top of
``pydantic_ai.direct.model_request``. Capabilities are advertised to the model
as function tools; tool calls in the response are handed back to the calling
agent as ``CapabilityRequest`` items instead of being executed here.

Structured replies are requested by appending the response model's JSON
schema to the system instruction. The caller is responsible for parsing the
reply text, so a malformed reply stays a parse concern of the caller.
"""

import json
from typing import Any, List, Optional, Sequence, Type

from pydantic import BaseModel
from pydantic_ai.direct import model_request
from pydantic_ai.messages import (
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    ToolCallPart,
    UserPromptPart,
)
from pydantic_ai.models import Model, ModelRequestParameters
from pydantic_ai.tools import ToolDefinition

from superai.core.logging_config import get_logger

from ..capabilities.base import CapabilityDescriptor
from ..errors import CompletionServiceError
from .base import CapabilityRequest, CompletionResult

logger = get_logger(__name__)


def _tool_definitions(capabilities: Optional[Sequence[CapabilityDescriptor]]) -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name=cap.name,
            description=cap.description,
            parameters_json_schema=cap.parameters_json_schema(),
        )
        for cap in capabilities or ()
    ]


def _structured_instruction(system_instruction: str, response_schema: Optional[Type[BaseModel]]) -> str:
    if response_schema is None:
        return system_instruction
    schema = json.dumps(response_schema.model_json_schema(by_alias=True))
    return (
        f"{system_instruction}\n\n"
        "Respond with a single JSON object only, with no prose and no code fences. "
        f"The JSON must match this schema:\n{schema}"
    )


class PydanticAICompletionService:
    """Completion service backed by a pydantic-ai model.

    Attributes:
        _model: A pydantic-ai ``Model`` instance or a known model name such as
            ``"google-gla:gemini-2.5-pro"``.
    """

    def __init__(self, model: Model | str, *, model_settings: Optional[dict[str, Any]] = None) -> None:
        self._model = model
        self._model_settings = model_settings

    @staticmethod
    def _to_result(response: ModelResponse) -> CompletionResult:
        texts: List[str] = []
        requests: List[CapabilityRequest] = []
        for part in response.parts:
            if isinstance(part, TextPart):
                texts.append(part.content)
            elif isinstance(part, ToolCallPart):
                requests.append(CapabilityRequest(name=part.tool_name, args=part.args_as_dict()))
        return CompletionResult(text="".join(texts), capability_requests=requests)

    async def complete(
        self,
        *,
        prompt: str,
        system_instruction: str,
        capabilities: Optional[Sequence[CapabilityDescriptor]] = None,
        response_schema: Optional[Type[BaseModel]] = None,
    ) -> CompletionResult:
        messages = [
            ModelRequest(
                parts=[
                    SystemPromptPart(content=_structured_instruction(system_instruction, response_schema)),
                    UserPromptPart(content=prompt),
                ]
            )
        ]
        params = ModelRequestParameters(function_tools=_tool_definitions(capabilities), allow_text_output=True)

        try:
            response = await model_request(
                self._model,
                messages,
                model_settings=self._model_settings,
                model_request_parameters=params,
            )
        except Exception as e:
            logger.error(f"Completion request failed: {e}")
            raise CompletionServiceError(str(e)) from e

        result = self._to_result(response)
        logger.debug(
            f"Completion returned {len(result.text)} chars and {len(result.capability_requests)} capability request(s)"
        )
        return result
