from typing import List
from constructs import Construct
from aws_cdk import (
    aws_ec2 as ec2,
)

class INetworkZone(Construct):
  """
  Represents one VPC of the lab and the pieces other modules attach to.
  """
  def __init__(self, scope:Construct, id:str, **kwargs)->None:
    super().__init__(scope, id, **kwargs)

  @property
  def zone_name(self)->str:
    raise NotImplementedError()

  @property
  def cidr_block(self)->str:
    raise NotImplementedError()

  @property
  def vpc(self)->ec2.IVpc:
    raise NotImplementedError()

  @property
  def route_tables(self)->List[ec2.CfnRouteTable]:
    raise NotImplementedError()

  @property
  def security_group(self)->ec2.ISecurityGroup:
    raise NotImplementedError()
