from __future__ import annotations

import importlib

ulid_module = importlib.import_module("ulid")


def new_idea_id() -> str:
    return f"idea_{ulid_module.new().str}"


def new_evaluation_id() -> str:
    return f"eval_{ulid_module.new().str}"
