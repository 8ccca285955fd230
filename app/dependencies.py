"""Accessors for the collaborators ``create_app`` attaches to ``app.state``."""

from typing import Any, Dict

from fastapi import Request

from app.config import Settings
from app.models.content import PageSpec
from app.services.render import RenderPipeline


def settings_from_request(request: Request) -> Settings:
    return request.app.state.settings


def get_client(request: Request) -> Any:
    return request.app.state.client


def get_pipeline(request: Request) -> RenderPipeline:
    return request.app.state.pipeline


def get_pages(request: Request) -> Dict[str, PageSpec]:
    return request.app.state.pages
