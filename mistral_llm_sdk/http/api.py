"""FastAPI HTTP endpoints for Mistral LLM SDK.

Mount ``router`` on a FastAPI application to expose generation, streaming,
status and parameter-schema endpoints.
"""

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from ..api.client import MistralClient
from ..config.schema import describe_schema
from ..core.normalization.params import build_params, form_parameters
from ..core.registry import get_available_models, is_model_available
from ..errors import ConfigurationError
from ..models.conversation_types import ConversationMessage
from ..providers.base import ProviderError
from ..providers.mistral.adapter import MistralProvider
from ..providers.mistral.payloads import form_tools


class GenerateRequest(BaseModel):
    """Request body for /generate and /stream."""
    messages: Union[str, List[ConversationMessage]]
    model: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)
    tools: Optional[List[Dict[str, Any]]] = None


router = APIRouter()

# Global client instance
llm_client = MistralClient()


def _sse_data(text: str) -> str:
    """One server-sent event; each line of the text gets its own data field."""
    return "".join(f"data: {line}\n" for line in text.split("\n")) + "\n"


def _configuration_error(e: ConfigurationError) -> HTTPException:
    return HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})


@router.post("/generate")
async def llm_generate(request: GenerateRequest):
    """Generate a completion."""
    try:
        return await llm_client.generate(
            request.messages,
            request.model,
            tools=request.tools,
            raw_params=request.params
        )
    except ConfigurationError as e:
        raise _configuration_error(e)
    except ProviderError as e:
        raise HTTPException(status_code=e.status_code or 500, detail=str(e))


@router.post("/stream")
async def llm_stream(request: GenerateRequest):
    """Stream a completion as server-sent events."""
    try:
        # Reject bad parameters before the response starts
        form_parameters(build_params(request.params, model=request.model))
        form_tools(request.tools)
    except ConfigurationError as e:
        raise _configuration_error(e)

    async def generate_stream():
        try:
            async for chunk in llm_client.stream(
                request.messages,
                request.model,
                tools=request.tools,
                raw_params=request.params
            ):
                yield _sse_data(chunk)
        except ProviderError as e:
            yield "event: error\n" + _sse_data(str(e))
        yield "data: [DONE]\n\n"

    return StreamingResponse(
        generate_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"}
    )


@router.get("/status")
async def llm_status():
    """Report whether the API key is configured and which models are usable."""
    return {
        **MistralProvider.get_metadata(),
        "available": llm_client.is_available(),
        "models": {
            model_id: is_model_available(model_id)
            for model_id in get_available_models()
        }
    }


@router.get("/schema")
async def llm_schema():
    """Describe the accepted request parameters."""
    return describe_schema()
