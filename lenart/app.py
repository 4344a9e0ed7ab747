from typing import Optional

import customtkinter as ctk

from lenart.config import LenartConfig
from lenart.controllers.app_controller import AppController
from lenart.controllers.session import DrawingSession
from lenart.ui.drawing_canvas import DrawingCanvas
from lenart.ui.toolbar import Toolbar


class LenartApp(ctk.CTk):
    def __init__(self, config: Optional[LenartConfig] = None) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("LenART")
        self.minsize(640, 480)

        session = DrawingSession(config)

        # root layout: canvas on top, tool bar below
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._canvas = DrawingCanvas(self, base_color=session.config.base_color)
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._toolbar = Toolbar(self, colors=session.config.palette, thickness_options=session.config.thickness_options)
        self._toolbar.grid(row=1, column=0, sticky="ew", padx=12, pady=(6, 12))

        self._controller = AppController(canvas=self._canvas, toolbar=self._toolbar, window=self, session=session)
        self._controller.bind_events()
