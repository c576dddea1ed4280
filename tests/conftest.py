"""
Shared pytest fixtures for the stack tests.

Stacks are synthesized through the same path as `cdk synth`: the config is
read from the app context and the aspects are registered on the app.
"""

from collections.abc import Callable
from typing import Any

import pytest
from aws_cdk.assertions import Template

from app import VpcPluralsightApp
from vpc_pluralsight.stack import VpcPluralsightStack

TRANSIT_CONTEXT = {"deploy_transit": "true", "router_ami_id": "ami-0123456789abcdef0"}


def synth_app(**context: Any) -> VpcPluralsightApp:
    return VpcPluralsightApp(context=context)


@pytest.fixture
def make_stack() -> Callable[..., VpcPluralsightStack]:
    """Factory building the stack from CDK context overrides."""

    def _make(**context: Any) -> VpcPluralsightStack:
        return synth_app(**context).network

    return _make


@pytest.fixture(scope="module")
def default_stack() -> VpcPluralsightStack:
    return synth_app().network


@pytest.fixture(scope="module")
def default_template(default_stack: VpcPluralsightStack) -> Template:
    return Template.from_stack(default_stack)


@pytest.fixture(scope="module")
def transit_stack() -> VpcPluralsightStack:
    return synth_app(**TRANSIT_CONTEXT).network


@pytest.fixture(scope="module")
def transit_template(transit_stack: VpcPluralsightStack) -> Template:
    return Template.from_stack(transit_stack)


@pytest.fixture(scope="module")
def cloudhub_stack() -> VpcPluralsightStack:
    return synth_app(deploy_cloudhub="true", **TRANSIT_CONTEXT).network


@pytest.fixture(scope="module")
def cloudhub_template(cloudhub_stack: VpcPluralsightStack) -> Template:
    return Template.from_stack(cloudhub_stack)

