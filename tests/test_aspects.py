"""
Tests for the removal policy and manual step aspects.
"""

from aws_cdk.assertions import Annotations, Match, Template

from vpc_pluralsight.aspects import VPN_MANUAL_STEPS


class TestRemovalPolicy:
    def test_everything_is_destroyed_by_default(self, default_template: Template):
        for resource_type in (
            "AWS::EC2::VPC",
            "AWS::EC2::Subnet",
            "AWS::EC2::Instance",
            "AWS::EC2::KeyPair",
            "AWS::EC2::SecurityGroup",
            "AWS::Logs::LogGroup",
            "AWS::IAM::Role",
        ):
            retained = default_template.find_resources(resource_type, {"DeletionPolicy": Match.not_(Match.exact("Delete"))})
            assert retained == {}, resource_type

    def test_retain_resources(self, make_stack):
        template = Template.from_stack(make_stack(retain_resources="true"))

        template.all_resources("AWS::EC2::VPC", {"DeletionPolicy": "Retain", "UpdateReplacePolicy": "Retain"})
        template.all_resources("AWS::Logs::LogGroup", {"DeletionPolicy": "Retain"})


class TestManualSteps:
    def test_no_vpn_notes_without_transit(self, default_stack):
        notes = Annotations.from_stack(default_stack).find_info("*", Match.string_like_regexp("Manual step"))

        assert notes == []

    def test_vpn_connection_notes(self, cloudhub_stack):
        notes = Annotations.from_stack(cloudhub_stack).find_info("*", VPN_MANUAL_STEPS)

        assert len(notes) == 3

    def test_customer_gateway_notes(self, transit_stack):
        Annotations.from_stack(transit_stack).has_info(
            "/VpcPluralsightStack/Transit/RouterGateway", Match.string_like_regexp("IKE")
        )

    def test_instance_without_key_pair(self, default_stack):
        notes = Annotations.from_stack(default_stack).find_warning("*", Match.string_like_regexp("no key pair"))

        assert len(notes) == 1
        assert notes[0].id.startswith("/VpcPluralsightStack/Shared/Instance")

    def test_key_pair_note_is_not_info(self, default_stack):
        notes = Annotations.from_stack(default_stack).find_info("*", Match.string_like_regexp("no key pair"))

        assert notes == []
