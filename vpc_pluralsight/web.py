from typing import List
from constructs import Construct
from aws_cdk import (
    CfnTag,
    Tags,
    aws_ec2 as ec2,
)
from vpc_pluralsight.config import WebVpcConfig
from vpc_pluralsight.interfaces import INetworkZone
from vpc_pluralsight.networking import NetworkingLayer

class WebVpc(INetworkZone):
  """
  Public facing part of the lab: a web server reachable from the internet.
  """
  def __init__(self, scope:Construct, id:str, config:WebVpcConfig, availability_zone:str, admin_cidr:str, **kwargs)->None:
    super().__init__(scope, id, **kwargs)
    self.config = config
    Tags.of(self).add('course-module','web-vpc')

    self.networking = NetworkingLayer(self,'Networking',
      vpc_name=config.vpc_name,
      cidr=config.cidr_block,
      subnet=config.subnet,
      availability_zone=availability_zone)
    self.networking.add_internet_gateway()

    self.__security_group = ec2.SecurityGroup(self,'SecurityGroup',
      vpc=self.vpc,
      security_group_name=config.security_group_name,
      description='Public VPC security group',
      allow_all_outbound=True)

    self.__security_group.add_ingress_rule(
      peer=ec2.Peer.ipv4(admin_cidr),
      connection=ec2.Port.tcp(22),
      description='SSH access from '+admin_cidr)

    self.__security_group.add_ingress_rule(
      peer=ec2.Peer.any_ipv4(),
      connection=ec2.Port.tcp(80),
      description='HTTP from any ipv4 address')

    self.__security_group.add_ingress_rule(
      peer=ec2.Peer.any_ipv6(),
      connection=ec2.Port.tcp(80),
      description='HTTP from any ipv6 address')

    self.key_pair = ec2.KeyPair(self,'SshKeyPair',
      key_pair_name=config.key_pair_name)

    self.instance = ec2.Instance(self,'Instance',
      vpc=self.vpc,
      vpc_subnets=self.networking.subnet_selection,
      private_ip_address=config.instance_ip,
      instance_type=ec2.InstanceType(config.instance_type),
      machine_image=ec2.MachineImage.latest_amazon_linux2(),
      instance_name=config.instance_name,
      key_pair=self.key_pair,
      security_group=self.__security_group)

    # Static public address for the web server
    self.elastic_ip = ec2.CfnEIP(self,'ElasticIp',
      domain='vpc',
      tags=[CfnTag(key='Name',value=config.instance_name)])

    ec2.CfnEIPAssociation(self,'ElasticIpAssociation',
      instance_id=self.instance.instance_id,
      allocation_id=self.elastic_ip.attr_allocation_id)

  @property
  def zone_name(self)->str:
    return 'Web'

  @property
  def cidr_block(self)->str:
    return self.config.cidr_block

  @property
  def vpc(self)->ec2.IVpc:
    return self.networking.vpc

  @property
  def route_tables(self)->List[ec2.CfnRouteTable]:
    return self.networking.route_tables

  @property
  def security_group(self)->ec2.ISecurityGroup:
    return self.__security_group

  @property
  def public_ip(self)->str:
    # Ref of an EIP is its address
    return self.elastic_ip.ref
