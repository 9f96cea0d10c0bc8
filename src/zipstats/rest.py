"""HTTP front end (aiohttp).

Routes, all under ``/parking``:

* ``GET  /arguments`` - currently configured dataset files;
* ``POST /arguments`` - validate and install a new set of dataset files;
* ``GET  /questions`` - the list of supported questions;
* ``GET  /questions/{number}?zip=<area code>`` - the rendered answer.

Answers are computed in the default executor so slow first loads do not
block the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from aiohttp import web
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from zipstats.aggregator import StatsAggregator
from zipstats.audit import AuditLog
from zipstats.config import StatsConfig
from zipstats.exceptions import (
    DatasetLoadError,
    InvalidQuestionError,
    MissingAreaCodeError,
    ZipStatsConfigError,
)
from zipstats.models.answers import render_answer
from zipstats.models.questions import Question
from zipstats.validation import validate_config

_logger = logging.getLogger(__name__)


class ArgumentsRequest(BaseModel):
    """Body of ``POST /parking/arguments`` (camelCase keys)."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    parking_format: str
    parking_file: str
    properties_file: str
    population_file: str
    log_file: str

    def to_config(self) -> StatsConfig:
        return StatsConfig(
            parking_format=self.parking_format,  # type: ignore[arg-type]
            parking_file=self.parking_file,
            properties_file=self.properties_file,
            population_file=self.population_file,
            log_file=self.log_file,
        )


@dataclass
class ServiceState:
    """Mutable per-application state: the active configuration and engine."""

    config: StatsConfig | None = None
    audit: AuditLog | None = None
    aggregator: StatsAggregator | None = None

    def install(self, config: StatsConfig) -> None:
        self.config = config
        self.audit = AuditLog(config.log_file)
        self.aggregator = StatsAggregator.from_config(config, audit=self.audit)


STATE_KEY = web.AppKey("zipstats_state", ServiceState)


def _state(request: web.Request) -> ServiceState:
    return request.app[STATE_KEY]


async def get_arguments(request: web.Request) -> web.Response:
    config = _state(request).config
    if config is None:
        return web.Response(status=404, text="No arguments found.")
    arguments = ", ".join(
        [
            str(config.parking_format),
            config.parking_file,
            config.population_file,
            config.properties_file,
            config.log_file,
        ]
    )
    return web.Response(text=arguments)


async def post_arguments(request: web.Request) -> web.Response:
    try:
        body = await request.json()
        config = ArgumentsRequest.model_validate(body).to_config()
        validate_config(config)
    except (ValueError, ValidationError, ZipStatsConfigError) as exc:
        _logger.debug("Rejected arguments", exc_info=True)
        return web.Response(status=400, text=str(exc))

    state = _state(request)
    state.install(config)
    assert state.audit is not None  # noqa: S101
    state.audit.log_file_read(config.log_file)
    return web.Response(status=201, text="Arguments are correct. You can choose parameter")


async def get_questions(request: web.Request) -> web.Response:
    return web.json_response([f"{int(q)} - {q.title}" for q in Question])


async def answer_question(request: web.Request) -> web.Response:
    state = _state(request)
    if state.aggregator is None or state.audit is None:
        return web.Response(status=404, text="No arguments found.")

    number = request.match_info["number"]
    area_code = request.query.get("zip")
    state.audit.log_choice(number)

    try:
        question = Question.parse(number)
    except InvalidQuestionError:
        return web.Response(status=400, text="Unknown question, try choosing another one.")

    if question.is_area_scoped:
        if not area_code:
            return web.Response(status=400, text="You should enter ZIP-code for this question")
        state.audit.log_choice(area_code)

    loop = asyncio.get_running_loop()
    try:
        answer = await loop.run_in_executor(None, state.aggregator.compute, question, area_code)
    except MissingAreaCodeError:
        return web.Response(status=400, text="You should enter ZIP-code for this question")
    except DatasetLoadError as exc:
        _logger.warning("Question %d failed: %s", question, exc)
        return web.Response(status=500, text=f"The problem occurred: {exc}")

    return web.Response(text=render_answer(answer))


def create_app(config: StatsConfig | None = None) -> web.Application:
    """Build the application, optionally pre-configured with dataset files."""
    state = ServiceState()
    if config is not None:
        state.install(config)

    app = web.Application()
    app[STATE_KEY] = state
    app.router.add_get("/parking/arguments", get_arguments)
    app.router.add_post("/parking/arguments", post_arguments)
    app.router.add_get("/parking/questions", get_questions)
    app.router.add_get("/parking/questions/{number}", answer_question)
    return app


def run_server(config: StatsConfig | None = None, *, host: str = "127.0.0.1", port: int = 8080) -> None:
    web.run_app(create_app(config), host=host, port=port)
