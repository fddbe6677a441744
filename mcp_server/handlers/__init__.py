"""Collect the ``router`` of every handler module in this package."""
from importlib import import_module
from pkgutil import iter_modules
from pathlib import Path

from fastapi import APIRouter

routers: list[APIRouter] = []

for mod in sorted(iter_modules([str(Path(__file__).parent)]), key=lambda m: m.name):
    if mod.ispkg:
        continue
    router = getattr(import_module(f"{__name__}.{mod.name}"), "router", None)
    if isinstance(router, APIRouter):
        routers.append(router)
