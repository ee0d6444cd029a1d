import logging
import unittest

from agroutils import logging_utils
from agroutils.logging_utils import (
    EnsureTagFilter,
    MaxLevelFilter,
    build_logging_config,
    get_tagged_logger,
)


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        self.records.append(record)


def _record(name="agroweather.data_sources.factory", level=logging.INFO):
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


class TestLoggingUtils(unittest.TestCase):
    def test_build_logging_config_has_expected_handlers_and_filters(self):
        cfg = build_logging_config(service_name="agrotest")
        self.assertIn("stdout", cfg["handlers"])
        self.assertIn("stderr", cfg["handlers"])
        self.assertEqual(cfg["filters"]["service_name"]["service_name"], "agrotest")
        self.assertEqual(cfg["handlers"]["stderr"]["level"], "WARNING")

    def test_get_tagged_logger_injects_tag(self):
        handler = _ListHandler()
        logger = get_tagged_logger("foo.bar", tag="custom_tag")
        base_logger = logger.logger
        base_logger.setLevel(logging.DEBUG)
        base_logger.addHandler(handler)
        base_logger.propagate = False

        logger.info("hello world")

        self.assertTrue(handler.records)
        self.assertEqual(handler.records[-1].tag, "custom_tag")

        # cleanup
        base_logger.removeHandler(handler)

    def test_call_site_extra_is_kept_alongside_tag(self):
        handler = _ListHandler()
        logger = get_tagged_logger("agroweather.extra_test", tag="engine")
        base_logger = logger.logger
        base_logger.setLevel(logging.DEBUG)
        base_logger.addHandler(handler)
        base_logger.propagate = False
        try:
            logger.warning("Skipping malformed forecast sample", extra={"index": 3, "field": "timestamp"})
            record = handler.records[-1]
            self.assertEqual(record.tag, "engine")
            self.assertEqual(record.index, 3)
            self.assertEqual(record.field, "timestamp")
        finally:
            base_logger.removeHandler(handler)

    def test_default_tag_is_last_name_segment(self):
        logger = get_tagged_logger("agroweather.weather_service")
        self.assertEqual(logger.extra["tag"], "weather_service")

    def test_ensure_tag_filter_falls_back_to_logger_name(self):
        record = _record()
        EnsureTagFilter().filter(record)
        self.assertEqual(record.tag, "factory")

    def test_max_level_filter_blocks_warnings(self):
        f = MaxLevelFilter(logging.INFO)
        self.assertTrue(f.filter(_record(level=logging.INFO)))
        self.assertFalse(f.filter(_record(level=logging.WARNING)))

    def test_setup_logging_override_applies_filters(self):
        root = logging.getLogger()
        orig_handlers = root.handlers[:]
        orig_level = root.level
        try:
            logging_utils.setup_logging(level="INFO", service_name="agrotest", override_existing=True)
            self.assertTrue(root.handlers)
            self.assertTrue(
                any(
                    any(f.__class__.__name__ == "ServiceNameFilter" for f in h.filters)
                    for h in root.handlers
                )
            )
        finally:
            root.handlers = orig_handlers
            root.setLevel(orig_level)
            root.propagate = True
            logging_utils._CONFIGURED = False  # reset for other tests


if __name__ == "__main__":
    unittest.main()
