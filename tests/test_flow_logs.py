"""
Tests for VPC flow logs.
"""

import pytest
from aws_cdk import aws_logs as logs
from aws_cdk.assertions import Match, Template

from vpc_pluralsight.flow_logs import retention_for


class TestFlowLogs:
    def test_one_flow_log_per_vpc(self, default_template: Template):
        default_template.resource_count_is("AWS::EC2::FlowLog", 2)
        default_template.resource_count_is("AWS::Logs::LogGroup", 2)

    @pytest.mark.parametrize("zone", ["Web", "Shared"])
    def test_flow_log_targets_vpc(self, default_template: Template, zone):
        default_template.has_resource_properties(
            "AWS::EC2::FlowLog",
            {
                "ResourceId": {"Ref": Match.string_like_regexp(zone + "NetworkingVpc")},
                "ResourceType": "VPC",
                "TrafficType": "ALL",
                "LogDestinationType": "cloud-watch-logs",
                "LogGroupName": {"Ref": Match.string_like_regexp("FlowLogs" + zone + "LogGroup")},
                "DeliverLogsPermissionArn": {"Fn::GetAtt": [Match.string_like_regexp("FlowLogs" + zone + "Role"), "Arn"]},
            },
        )

    def test_log_group(self, default_template: Template):
        default_template.has_resource(
            "AWS::Logs::LogGroup",
            {
                "Properties": {"LogGroupName": "/vpc-pluralsight/web/flow-logs", "RetentionInDays": 30},
                "DeletionPolicy": "Delete",
            },
        )

    def test_role_trusts_flow_logs_service(self, default_template: Template):
        default_template.has_resource_properties(
            "AWS::IAM::Role",
            {
                "AssumeRolePolicyDocument": {
                    "Statement": Match.array_with(
                        [
                            Match.object_like(
                                {"Action": "sts:AssumeRole", "Principal": {"Service": "vpc-flow-logs.amazonaws.com"}}
                            )
                        ]
                    )
                }
            },
        )

    def test_retention_from_context(self, make_stack):
        template = Template.from_stack(make_stack(flow_log_retention_days="45"))

        template.has_resource_properties(
            "AWS::Logs::LogGroup",
            {"LogGroupName": "/vpc-pluralsight/shared/flow-logs", "RetentionInDays": 60},
        )

    def test_flow_logs_can_be_disabled(self, make_stack):
        template = Template.from_stack(make_stack(deploy_flow_logs="false"))

        template.resource_count_is("AWS::EC2::FlowLog", 0)
        template.resource_count_is("AWS::Logs::LogGroup", 0)


class TestRetention:
    @pytest.mark.parametrize(
        "days,expected",
        [
            (1, logs.RetentionDays.ONE_DAY),
            (2, logs.RetentionDays.THREE_DAYS),
            (30, logs.RetentionDays.ONE_MONTH),
            (31, logs.RetentionDays.TWO_MONTHS),
            (365, logs.RetentionDays.ONE_YEAR),
            (91, logs.RetentionDays.FOUR_MONTHS),
            (120, logs.RetentionDays.FOUR_MONTHS),
            (366, logs.RetentionDays.THIRTEEN_MONTHS),
            (400, logs.RetentionDays.THIRTEEN_MONTHS),
            (731, logs.RetentionDays.TWO_YEARS),
            (1000, logs.RetentionDays.THREE_YEARS),
            (3653, logs.RetentionDays.TEN_YEARS),
            (4000, logs.RetentionDays.INFINITE),
        ],
    )
    def test_rounds_up(self, days, expected):
        assert retention_for(days) == expected
