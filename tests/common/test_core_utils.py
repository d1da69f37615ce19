import logging

from common.core_utils import COLOUR_RESET, SymbolFormatter, setup_logging


def make_record(level, message="hello"):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_symbol_formatter_uses_level_symbol():
    formatter = SymbolFormatter(
        fmt="%(symbol)s%(message)s",
        symbols={"warning": "!", "info": "i"},
    )
    assert formatter.format(make_record(logging.WARNING)) == "! hello"
    assert formatter.format(make_record(logging.INFO)) == "i hello"


def test_symbol_formatter_colours_symbol():
    formatter = SymbolFormatter(
        fmt="%(symbol)s%(message)s",
        symbols={"error": "x"},
        use_colour=True,
    )
    output = formatter.format(make_record(logging.ERROR))
    assert output.startswith("\033[31mx" + COLOUR_RESET)
    assert output.endswith(" hello")


def test_symbol_formatter_keeps_single_symbol():
    formatter = SymbolFormatter(
        fmt="%(symbol)s%(message)s",
        symbols={"warning": "!", "success": "ok"},
        use_colour=True,
    )
    assert (
        formatter.format(make_record(logging.WARNING, "! already installed"))
        == "! already installed"
    )
    assert (
        formatter.format(make_record(logging.INFO, "ok installed"))
        == "ok installed"
    )


def test_setup_logging_with_prefix(restore_root_logger, capsys):
    setup_logging(
        log_level=logging.DEBUG,
        log_prefix="[APPS]",
        symbols={"info": "i"},
    )

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    logging.getLogger("some.module").info("installing")

    assert "[APPS] i installing" in capsys.readouterr().out


def test_setup_logging_writes_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging(log_file=str(log_file), log_to_console=False)

    logging.getLogger("x").warning("careful")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert "careful" in log_file.read_text(encoding="utf-8")
