"""
CDK aspects applied to every construct of the app during `cdk synth`.

Usage:
  from vpc_pluralsight.aspects import add_aspects
  add_aspects(app, config)
"""

import aws_cdk as cdk
import jsii
from aws_cdk import aws_ec2 as ec2
from constructs import IConstruct

from vpc_pluralsight.config import NetworkConfig

VPN_MANUAL_STEPS = (
  "Manual step: download the configuration of this VPN connection from the VPC console, "
  "replace the router address placeholder with the router private IP, "
  "then SSH into the router and paste it after 'conf t'"
)


@jsii.implements(cdk.IAspect)
class RemovalPolicyAspect:
  """
  Applies one removal policy to every CloudFormation resource.

  The lab is meant to be torn down after each module, so DESTROY is the default.
  """

  def __init__(self, policy: cdk.RemovalPolicy = cdk.RemovalPolicy.DESTROY):
    self._policy = policy

  def visit(self, node: IConstruct) -> None:
    if cdk.CfnResource.is_cfn_resource(node):
      node.apply_removal_policy(self._policy)


@jsii.implements(cdk.IAspect)
class ManualStepsAspect:
  """
  Surfaces the steps that can not be expressed as resources.

  Checks:
  - VPN connections need their configuration applied on the customer router
  - Instances without a key pair can not be reached over SSH (warning)
  """

  def visit(self, node: IConstruct) -> None:
    if isinstance(node, ec2.CfnVPNConnection):
      cdk.Annotations.of(node).add_info(VPN_MANUAL_STEPS)

    if isinstance(node, ec2.CfnCustomerGateway):
      cdk.Annotations.of(node).add_info(
        "Customer gateway must accept IKE (udp/500, udp/4500) from the AWS tunnel endpoints"
      )

    if isinstance(node, ec2.CfnInstance) and node.key_name is None:
      cdk.Annotations.of(node).add_warning_v2(
        "vpc-pluralsight:instance-without-key-pair",
        "Instance has no key pair; SSH access is not possible",
      )


def add_aspects(scope: cdk.App, config: NetworkConfig) -> None:
  """
  Add the removal policy and manual step aspects to all stacks in the CDK app.

  Args:
    scope: The CDK App to add aspects to
    config: Resolved network configuration
  """
  policy = cdk.RemovalPolicy.RETAIN if config.retain_resources else cdk.RemovalPolicy.DESTROY
  cdk.Aspects.of(scope).add(RemovalPolicyAspect(policy))
  cdk.Aspects.of(scope).add(ManualStepsAspect())
