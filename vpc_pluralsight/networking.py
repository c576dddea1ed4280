from typing import List, Optional
from constructs import Construct
from aws_cdk import (
    CfnTag,
    aws_ec2 as ec2,
)
from vpc_pluralsight.config import SubnetSpec

class NetworkingLayer(Construct):
  """
  A VPC with a single hand-wired subnet and route table.
  """
  def __init__(self, scope:Construct, id:str, vpc_name:str, cidr:str, subnet:SubnetSpec, availability_zone:str, **kwargs) -> None:
    super().__init__(scope, id, **kwargs)
    self.vpc_name = vpc_name
    self.cidr = cidr
    self.internet_gateway:Optional[ec2.CfnInternetGateway] = None

    # An empty subnet configuration stops CDK from generating its own subnets
    self.vpc = ec2.Vpc(self,'Vpc',
      vpc_name=vpc_name,
      ip_addresses=ec2.IpAddresses.cidr(cidr),
      enable_dns_hostnames=True,
      enable_dns_support=True,
      restrict_default_security_group=False,
      subnet_configuration=[])

    self.cfn_subnet = ec2.CfnSubnet(self,'Subnet',
      vpc_id=self.vpc.vpc_id,
      cidr_block=subnet.cidr_block,
      availability_zone=availability_zone,
      tags=[CfnTag(key='Name',value=subnet.name)])

    self.route_table = ec2.CfnRouteTable(self,'RouteTable',
      vpc_id=self.vpc.vpc_id,
      tags=[CfnTag(key='Name',value=subnet.name)])

    ec2.CfnSubnetRouteTableAssociation(self,'RouteTableAssociation',
      subnet_id=self.cfn_subnet.attr_subnet_id,
      route_table_id=self.route_table.attr_route_table_id)

    self.subnet = ec2.Subnet.from_subnet_attributes(self,'SubnetRef',
      subnet_id=self.cfn_subnet.attr_subnet_id,
      availability_zone=availability_zone,
      ipv4_cidr_block=subnet.cidr_block,
      route_table_id=self.route_table.attr_route_table_id)

  @property
  def route_tables(self)->List[ec2.CfnRouteTable]:
    return [self.route_table]

  @property
  def subnet_selection(self)->ec2.SubnetSelection:
    return ec2.SubnetSelection(subnets=[self.subnet])

  def add_internet_gateway(self, name:Optional[str]=None)->ec2.CfnInternetGateway:
    """
    Attach an internet gateway and send 0.0.0.0/0 through it.
    """
    if self.internet_gateway is not None:
      return self.internet_gateway

    tags = [] if name is None else [CfnTag(key='Name',value=name)]
    self.internet_gateway = ec2.CfnInternetGateway(self,'InternetGateway',
      tags=tags)

    attachment = ec2.CfnVPCGatewayAttachment(self,'InternetGatewayAttachment',
      vpc_id=self.vpc.vpc_id,
      internet_gateway_id=self.internet_gateway.attr_internet_gateway_id)

    route = ec2.CfnRoute(self,'DefaultRoute',
      route_table_id=self.route_table.attr_route_table_id,
      destination_cidr_block='0.0.0.0/0',
      gateway_id=self.internet_gateway.attr_internet_gateway_id)

    # The route is rejected until the gateway is attached
    route.add_resource_dependency(attachment)
    return self.internet_gateway
