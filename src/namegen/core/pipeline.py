"""Generation pipeline orchestrator."""

import threading
import time
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional

from namegen.core.catalog import ToolSource
from namegen.core.config import Config
from namegen.core.errors import NameGenError, ProviderError
from namegen.core.llm_base import ProviderClient
from namegen.core.logging import StructuredLogger, get_logger
from namegen.core.prompts import build_prompt
from namegen.core.retry import retry_with_backoff
from namegen.schemas.generation import GenerationRequest, GenerationResponse
from namegen.schemas.tool import ToolDefinition
from namegen.stages.model_selector import ModelSelector
from namegen.stages.parameter_merger import ParameterMerger
from namegen.stages.request_builder import RequestBuilder
from namegen.stages.response_normalizer import ResponseNormalizer

# How often a waiting call checks for cancellation.
_POLL_INTERVAL = 0.05
# Extra wall-clock allowance over the client timeout before the wait is abandoned.
_TIMEOUT_GRACE = 1.0


class GenerationCancelled(ProviderError):
    """The caller cancelled an in-flight generation; any result is discarded."""

    def __init__(self):
        super().__init__("Generation cancelled", retryable=False)


class GenerationPipeline:
    """
    Runs one name generation end to end.

    merge parameters -> select model -> build request -> call provider -> normalize reply

    Every invocation is independent; the pipeline keeps no per-call state.
    """

    def __init__(
        self,
        catalog: ToolSource,
        client: ProviderClient,
        timeout: float = 30.0,
        max_retries: int = 1,
        retry_delay: float = 0.5,
        parameter_merger: Optional[ParameterMerger] = None,
        model_selector: Optional[ModelSelector] = None,
        request_builder: Optional[RequestBuilder] = None,
        response_normalizer: Optional[ResponseNormalizer] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize pipeline.

        Args:
            catalog: Source of tool definitions and active models
            client: AI provider client
            timeout: Per-call provider timeout in seconds
            max_retries: Provider retries after a failed call (clamped to 0..1)
            retry_delay: Delay before the retry in seconds
            parameter_merger: Override the parameter merging stage
            model_selector: Override the model selection stage
            request_builder: Override the request building stage
            response_normalizer: Override the response normalization stage
            sleep: Sleep function used between attempts
        """
        self.catalog = catalog
        self.client = client
        self.timeout = timeout
        self.max_retries = max(0, min(max_retries, 1))
        self.retry_delay = retry_delay
        self.parameter_merger = parameter_merger or ParameterMerger()
        self.model_selector = model_selector or ModelSelector()
        self.request_builder = request_builder or RequestBuilder()
        self.response_normalizer = response_normalizer or ResponseNormalizer()
        self.sleep = sleep
        self.logger: StructuredLogger = get_logger("namegen.pipeline")

    @classmethod
    def from_config(
        cls,
        config: Config,
        catalog: ToolSource,
        client: ProviderClient,
    ) -> "GenerationPipeline":
        return cls(
            catalog=catalog,
            client=client,
            timeout=float(config.timeout),
            max_retries=int(config.max_retries),
        )

    def prepare(
        self,
        tool: str | ToolDefinition,
        overrides: Optional[Mapping[str, Any]] = None,
        model: Optional[str] = None,
    ) -> GenerationRequest:
        """
        Validate inputs and build the generation request.

        Args:
            tool: Tool slug, or an already loaded ToolDefinition
            overrides: User supplied field values
            model: Model identifier the user asked for, if any

        Returns:
            Immutable GenerationRequest

        Raises:
            ToolNotFound: If the slug does not name a published tool
            ParameterValidationError: If any field fails validation
            ModelSelectionError: If no model can be resolved
        """
        if isinstance(tool, str):
            tool = self.catalog.get_tool(tool)

        start = time.perf_counter()
        try:
            parameters = self.parameter_merger.merge(tool, overrides)
        except NameGenError as e:
            self.logger.log_pipeline_stage(
                "parameter_merge", "failed", tool=tool.slug, error_code=e.code
            )
            raise
        self.logger.log_pipeline_stage(
            "parameter_merge",
            "completed",
            duration_ms=(time.perf_counter() - start) * 1000,
            tool=tool.slug,
        )

        candidates = set(tool.available_ai_model_identifiers)
        active_models = self.catalog.list_active_models(candidates)
        try:
            model_identifier = self.model_selector.select(tool, active_models, model)
        except NameGenError as e:
            self.logger.log_pipeline_stage(
                "model_selection", "failed", tool=tool.slug, error_code=e.code
            )
            raise
        self.logger.log_pipeline_stage(
            "model_selection", "completed", tool=tool.slug, model=model_identifier
        )

        return self.request_builder.build(tool, model_identifier, parameters)

    def execute(
        self,
        request: GenerationRequest,
        cancel_event: Optional[threading.Event] = None,
    ) -> GenerationResponse:
        """
        Call the provider for a built request and normalize its reply.

        Args:
            request: Request produced by prepare()
            cancel_event: Set by the caller to abandon the call

        Returns:
            GenerationResponse (never raises for provider failures)
        """
        call = retry_with_backoff(
            max_retries=self.max_retries,
            initial_delay=self.retry_delay,
            retryable_exceptions=(ProviderError,),
            should_retry=lambda e: e.retryable and not _is_set(cancel_event),
            logger_instance=self.logger,
            sleep=self.sleep,
        )(self._call_provider)

        try:
            text = call(request, cancel_event)
        except ProviderError as e:
            return self.response_normalizer.from_provider_error(e)

        if _is_set(cancel_event):
            return self.response_normalizer.from_provider_error(GenerationCancelled())

        payload = self.client.extract_names(text)
        response = self.response_normalizer.normalize(
            payload, model_identifier=request.model_identifier
        )
        if not response.success:
            self.logger.log_pipeline_stage(
                "response_normalization", "failed", error_code=response.error_code
            )
        else:
            self.logger.log_pipeline_stage(
                "response_normalization", "completed", name_count=len(response.names)
            )
        return response

    def generate(
        self,
        tool: str | ToolDefinition,
        overrides: Optional[Mapping[str, Any]] = None,
        model: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> GenerationResponse:
        """
        Run the whole pipeline.

        Args:
            tool: Tool slug, or an already loaded ToolDefinition
            overrides: User supplied field values
            model: Model identifier the user asked for, if any
            cancel_event: Set by the caller to abandon the provider call

        Returns:
            GenerationResponse; every failure is reported through error_code
        """
        try:
            request = self.prepare(tool, overrides, model)
        except NameGenError as e:
            return GenerationResponse.failure(e)
        return self.execute(request, cancel_event)

    def _call_provider(
        self,
        request: GenerationRequest,
        cancel_event: Optional[threading.Event],
    ) -> str:
        """One provider attempt, bounded by the timeout and abandoned on cancel."""
        if _is_set(cancel_event):
            raise GenerationCancelled()

        provider = getattr(self.client, "provider_name", type(self.client).__name__)
        prompt = build_prompt(request)
        start = time.perf_counter()

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="namegen-provider")
        try:
            future = executor.submit(self.client.generate, request, self.timeout)
            deadline = start + self.timeout + _TIMEOUT_GRACE
            while True:
                try:
                    text = future.result(timeout=_POLL_INTERVAL)
                    break
                except FutureTimeoutError:
                    if _is_set(cancel_event):
                        future.cancel()
                        raise GenerationCancelled() from None
                    if time.perf_counter() >= deadline:
                        future.cancel()
                        raise ProviderError(
                            f"Provider call timed out after {self.timeout}s"
                        ) from None
                except ProviderError:
                    raise
                except Exception as e:
                    raise ProviderError(f"Provider call failed: {e}") from e
        except ProviderError as e:
            self.logger.log_provider_call(
                provider,
                request.model_identifier,
                prompt,
                latency_ms=(time.perf_counter() - start) * 1000,
                error=str(e),
            )
            raise
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        self.logger.log_provider_call(
            provider,
            request.model_identifier,
            prompt,
            latency_ms=(time.perf_counter() - start) * 1000,
            response_length=len(text or ""),
        )
        return text


def _is_set(event: Optional[threading.Event]) -> bool:
    return event is not None and event.is_set()
