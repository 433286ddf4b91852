"""
Structured logger tests - JSON output and custom dimensions.
"""

import json
import logging

import pytest

from util_logger import ComponentType, JSONFormatter, LoggerFactory, LogContext, log_exceptions


class TestCreateLogger:
    def test_name_includes_component(self):
        logger = LoggerFactory.create_logger(ComponentType.CORE, "LoggerTestName")
        assert logger.name == "core.LoggerTestName"

    def test_single_json_handler(self):
        first = LoggerFactory.create_logger(ComponentType.SERVICE, "LoggerTestHandlers")
        second = LoggerFactory.create_logger(ComponentType.SERVICE, "LoggerTestHandlers")
        assert first is second
        assert sum(isinstance(h.formatter, JSONFormatter) for h in first.handlers) == 1

    def test_component_dimensions_injected(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "LoggerTestDims")
        with caplog.at_level(logging.INFO, logger="repository.LoggerTestDims"):
            logger.info("hello", extra={'custom_dimensions': {'account_name': 'acct'}})

        record = caplog.records[-1]
        assert record.custom_dimensions == {
            'component_type': 'repository',
            'component_name': 'LoggerTestDims',
            'account_name': 'acct',
        }

    def test_deployment_context(self, caplog):
        logger = LoggerFactory.create_with_context(
            ComponentType.SERVICE, "LoggerTestContext", deployment_id="d-1", resource_group="movie-rg"
        )
        with caplog.at_level(logging.INFO, logger="service.LoggerTestContext"):
            logger.info("step")
        dims = caplog.records[-1].custom_dimensions
        assert dims['deployment_id'] == "d-1"
        assert dims['resource_group'] == "movie-rg"


class TestJSONFormatter:
    def test_format(self):
        record = logging.LogRecord("service.X", logging.WARNING, __file__, 10, "retry %s", ("db",), None)
        record.custom_dimensions = {'attempt': 2}
        payload = json.loads(JSONFormatter().format(record))
        assert payload['level'] == "WARNING"
        assert payload['message'] == "retry db"
        assert payload['customDimensions'] == {'attempt': 2}

    def test_context_skips_unset_fields(self):
        assert LogContext(deployment_id="d").to_dict() == {'deployment_id': "d"}
        assert LogContext(operation="deploy").to_dict() == {'operation': "deploy"}


class TestLogExceptions:
    def test_logs_and_reraises(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "LoggerTestDecorator")

        @log_exceptions(logger=logger)
        def explode():
            raise ValueError("bad row")

        with caplog.at_level(logging.ERROR, logger="service.LoggerTestDecorator"):
            with pytest.raises(ValueError):
                explode()

        dims = caplog.records[-1].custom_dimensions
        assert dims['function_name'] == "explode"
        assert dims['exception_type'] == "ValueError"
