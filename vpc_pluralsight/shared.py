from typing import List
from constructs import Construct
from aws_cdk import (
    Tags,
    aws_ec2 as ec2,
)
from vpc_pluralsight.config import SharedVpcConfig
from vpc_pluralsight.interfaces import INetworkZone
from vpc_pluralsight.networking import NetworkingLayer

class SharedVpc(INetworkZone):
  """
  Private VPC holding the database server.
  It has no internet gateway; web traffic arrives over the peering.
  """
  def __init__(self, scope:Construct, id:str, config:SharedVpcConfig, availability_zone:str, peer_cidr:str, **kwargs)->None:
    super().__init__(scope, id, **kwargs)
    self.config = config
    Tags.of(self).add('course-module','shared-vpc')

    self.networking = NetworkingLayer(self,'Networking',
      vpc_name=config.vpc_name,
      cidr=config.cidr_block,
      subnet=config.subnet,
      availability_zone=availability_zone)

    self.__security_group = ec2.SecurityGroup(self,'SecurityGroup',
      vpc=self.vpc,
      security_group_name=config.security_group_name,
      description='Database security group',
      allow_all_outbound=True)

    self.__security_group.add_ingress_rule(
      peer=ec2.Peer.ipv4(peer_cidr),
      connection=ec2.Port.tcp(config.database_port),
      description='Database from '+peer_cidr)

    self.__security_group.add_ingress_rule(
      peer=ec2.Peer.ipv4(peer_cidr),
      connection=ec2.Port.all_icmp(),
      description='Grant icmp from '+peer_cidr)

    self.__security_group.add_ingress_rule(
      peer=ec2.Peer.ipv4(peer_cidr),
      connection=ec2.Port.tcp(22),
      description='Grant ssh from '+peer_cidr)

    self.instance = ec2.Instance(self,'Instance',
      vpc=self.vpc,
      vpc_subnets=self.networking.subnet_selection,
      private_ip_address=config.instance_ip,
      instance_type=ec2.InstanceType(config.instance_type),
      machine_image=ec2.MachineImage.latest_amazon_linux2(),
      instance_name=config.instance_name,
      security_group=self.__security_group)

  @property
  def zone_name(self)->str:
    return 'Shared'

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
