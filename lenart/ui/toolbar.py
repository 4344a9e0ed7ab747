from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import customtkinter as ctk


class Toolbar(ctk.CTkFrame):
    """Нижняя панель: палитра, толщина, ластик, сохранение/открытие/очистка."""
    def __init__(self, master: ctk.CTk, colors: Sequence[str], thickness_options: Sequence[float], **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_color_select: Optional[Callable[[int], None]] = None
        self.on_thickness_select: Optional[Callable[[int], None]] = None
        self.on_eraser_toggle: Optional[Callable[[], None]] = None
        self.on_save: Optional[Callable[[], None]] = None
        self.on_open: Optional[Callable[[], None]] = None
        self.on_clear: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(len(colors), weight=1)  # spacer after the colour dots

        # Palette
        self._color_buttons: List[ctk.CTkButton] = []
        for idx, color in enumerate(colors):
            btn = ctk.CTkButton(
                self,
                text="",
                width=28,
                height=28,
                corner_radius=14,
                fg_color=color,
                hover_color=color,
                border_color="#202020",
                command=lambda i=idx: self._emit_color(i),
            )
            btn.grid(row=0, column=idx, padx=(10 if idx == 0 else 4, 4), pady=8)
            self._color_buttons.append(btn)

        # Thickness
        self._thickness_labels = [f"{t:g}" for t in thickness_options]
        self._thickness_buttons = ctk.CTkSegmentedButton(
            self, values=self._thickness_labels, command=self._on_thickness_click
        )
        self._thickness_buttons.grid(row=0, column=len(colors) + 1, padx=6, pady=8, sticky="e")

        # Eraser
        self._eraser_btn = ctk.CTkButton(self, text="Кисть", width=80, command=self._emit_eraser)
        self._eraser_btn.grid(row=0, column=len(colors) + 2, padx=6, pady=8)

        # File actions
        self._save_btn = ctk.CTkButton(self, text="Сохранить…", width=100, command=self._emit_save)
        self._open_btn = ctk.CTkButton(self, text="Открыть…", width=100, command=self._emit_open)
        self._clear_btn = ctk.CTkButton(self, text="Очистить", width=100, command=self._emit_clear)
        self._save_btn.grid(row=0, column=len(colors) + 3, padx=6, pady=8)
        self._open_btn.grid(row=0, column=len(colors) + 4, padx=6, pady=8)
        self._clear_btn.grid(row=0, column=len(colors) + 5, padx=(6, 10), pady=8)

        # Status line
        self._status_val = ctk.StringVar(value="")
        self._status = ctk.CTkLabel(self, textvariable=self._status_val, anchor="w")
        self._status.grid(row=1, column=0, columnspan=len(colors) + 6, padx=10, pady=(0, 6), sticky="ew")

    # public API (sync from controller)
    def set_selection(self, color_index: int, eraser: bool) -> None:
        for idx, btn in enumerate(self._color_buttons):
            selected = not eraser and idx == color_index
            btn.configure(width=42 if selected else 28, height=42 if selected else 28,
                          corner_radius=21 if selected else 14, border_width=2 if selected else 0)
        self._eraser_btn.configure(text="Ластик" if eraser else "Кисть")

    def set_thickness_index(self, index: int) -> None:
        self._thickness_buttons.set(self._thickness_labels[index])

    def set_status(self, text: str) -> None:
        self._status_val.set(text)

    # events
    def _emit_color(self, index: int) -> None:
        if self.on_color_select:
            self.on_color_select(index)

    def _on_thickness_click(self, value: str) -> None:
        try:
            index = self._thickness_labels.index(value)
        except ValueError:
            return
        if self.on_thickness_select:
            self.on_thickness_select(index)

    def _emit_eraser(self) -> None:
        if self.on_eraser_toggle:
            self.on_eraser_toggle()

    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()

    def _emit_open(self) -> None:
        if self.on_open:
            self.on_open()

    def _emit_clear(self) -> None:
        if self.on_clear:
            self.on_clear()
