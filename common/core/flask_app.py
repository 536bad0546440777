"""Custom Flask application class with container reference."""

from typing import TYPE_CHECKING

from flask import Flask

if TYPE_CHECKING:
    from common.core.container import CommonContainer


class App(Flask):
    """Flask application with typed access to the DI container."""

    container: "CommonContainer"
