from logging import getLogger
from typing import List, Optional
from constructs import Construct
from aws_cdk import (
    CfnTag,
    Stack,
    Tags,
    aws_ec2 as ec2,
)
from vpc_pluralsight.config import TransitVpcConfig
from vpc_pluralsight.interfaces import INetworkZone
from vpc_pluralsight.networking import NetworkingLayer
from vpc_pluralsight.vpn import CustomerGateway, VirtualPrivateGateway

logger = getLogger(__name__)

class TransitVpc(INetworkZone):
  """
  Transit VPC running a software router that terminates the VPN into the shared VPC.

  After deployment the router still needs its configuration:
  1. Download the configuration generated for the VPN connection from the console.
  2. Replace the router address placeholder with the router private IP.
  3. SSH into the router, enter 'conf t' and paste the file.
  """
  def __init__(self, scope:Construct, id:str, config:TransitVpcConfig, availability_zone:str, admin_cidr:str,
    shared:INetworkZone, key_pair_name:Optional[str]=None, **kwargs)->None:
    super().__init__(scope, id, **kwargs)
    self.config = config
    Tags.of(self).add('course-module','transit-vpc')

    self.networking = NetworkingLayer(self,'Networking',
      vpc_name=config.vpc_name,
      cidr=config.cidr_block,
      subnet=config.subnet,
      availability_zone=availability_zone)
    self.networking.add_internet_gateway(name='transit-igw')

    self.__security_group = ec2.SecurityGroup(self,'SecurityGroup',
      vpc=self.vpc,
      description='Transit VPC router security group',
      allow_all_outbound=True)

    self.__security_group.add_ingress_rule(
      peer=ec2.Peer.ipv4(admin_cidr),
      connection=ec2.Port.tcp(22),
      description='SSH access from '+admin_cidr)

    # IKE, NAT traversal and the tunnels themselves
    for port in (500, 4500):
      self.__security_group.add_ingress_rule(
        peer=ec2.Peer.any_ipv4(),
        connection=ec2.Port.udp(port),
        description='IPsec udp/{}'.format(port))

    self.__security_group.add_ingress_rule(
      peer=ec2.Peer.any_ipv4(),
      connection=ec2.Port(protocol=ec2.Protocol.ESP, string_representation='ESP'),
      description='IPsec ESP')

    key_pair = None
    if key_pair_name is not None:
      key_pair = ec2.KeyPair.from_key_pair_name(self,'KeyPair',key_pair_name)

    self.router = ec2.Instance(self,'Router',
      vpc=self.vpc,
      vpc_subnets=self.networking.subnet_selection,
      private_ip_address=config.router_ip,
      instance_type=ec2.InstanceType(config.router_instance_type),
      machine_image=self.__router_image(),
      instance_name=config.router_name,
      key_pair=key_pair,
      source_dest_check=False,
      security_group=self.__security_group)

    self.elastic_ip = ec2.CfnEIP(self,'ElasticIp',
      domain='vpc',
      instance_id=self.router.instance_id,
      tags=[CfnTag(key='Name',value=config.router_name)])

    # The router is the customer gateway of the shared VPC
    self.router_gateway = CustomerGateway(self,'RouterGateway',
      name=config.router_name,
      ip_address=self.elastic_ip.ref,
      bgp_asn=config.router_bgp_asn)

    self.shared_gateway = VirtualPrivateGateway(self,'SharedGateway',
      zone=shared,
      name='shared-vgw')

    self.vpn_connection = self.shared_gateway.connect('SharedVpnConnection', self.router_gateway)

  def __router_image(self)->ec2.IMachineImage:
    if self.config.router_ami_id is not None:
      return ec2.MachineImage.generic_linux({
        Stack.of(self).region: self.config.router_ami_id
      })

    # Marketplace images have no SSM alias so look them up by name
    logger.info('Looking up router image by name: %s', self.config.router_ami_name)
    return ec2.LookupMachineImage(
      name=self.config.router_ami_name,
      owners=['aws-marketplace'])

  @property
  def zone_name(self)->str:
    return 'Transit'

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
  def vpn_connections(self)->List[ec2.CfnVPNConnection]:
    return list(self.shared_gateway.connections)
