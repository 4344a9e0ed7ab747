"""Точка входа в приложение."""
import logging
import sys
from typing import Optional, Sequence

from lenart.app import LenartApp
from lenart.config import load_config


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Читает конфигурацию, настраивает логирование и запускает главное окно.

    Единственный необязательный аргумент: путь к YAML-конфигу.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    config = load_config(args[0] if args else None)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = LenartApp(config)
    app.mainloop()


if __name__ == "__main__":
    main()
