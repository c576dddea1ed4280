"""
Tests for the CDK application entry point.
"""

import logging

import pytest

from app import VpcPluralsightApp, log_level


class TestLogLevel:
    @pytest.mark.parametrize("value", ["debug", "Debug", " DEBUG "])
    def test_level_names_are_case_insensitive(self, value):
        assert log_level(value) == "DEBUG"
        assert logging.getLevelName(log_level(value)) == logging.DEBUG


class TestApp:
    def test_app_builds_the_stack(self):
        app = VpcPluralsightApp()

        assert app.network.node.id == "VpcPluralsightStack"
        assert app.config.region == "eu-west-1"
