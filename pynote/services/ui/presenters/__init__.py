from __future__ import annotations

from .main_presenter import IMainView, Intent, MainPresenter

__all__ = ["IMainView", "Intent", "MainPresenter"]
