#!/usr/bin/env python3
"""
Fixed addressing plan for the lab networks.

Every value can be overridden through the CDK context, e.g.
  cdk synth --context region=eu-west-2 --context deploy_transit=true
"""
from dataclasses import dataclass, replace
from ipaddress import IPv4Address, IPv4Network, ip_address, ip_network
from logging import getLogger
from typing import Any, List, Optional, Tuple
from constructs import Node

logger = getLogger(__name__)

PRIVATE_ASN_RANGE = range(64512, 65535)

class ConfigurationError(ValueError):
  """
  Raised when the addressing plan can not be deployed as described.
  """
  pass

@dataclass(frozen=True)
class SubnetSpec:
  name: str
  cidr_block: str
  availability_zone: Optional[str] = None

@dataclass(frozen=True)
class WebVpcConfig:
  vpc_name: str = 'web-vpc'
  cidr_block: str = '10.1.0.0/16'
  subnet: SubnetSpec = SubnetSpec(name='web-pub', cidr_block='10.1.254.0/24')
  instance_ip: str = '10.1.254.10'
  instance_type: str = 't2.micro'
  instance_name: str = 'public-ec2-instance'
  key_pair_name: str = 'public-ssh-key-pair'
  security_group_name: str = 'web-pub-sg'

@dataclass(frozen=True)
class SharedVpcConfig:
  vpc_name: str = 'shared-vpc'
  cidr_block: str = '10.2.0.0/16'
  subnet: SubnetSpec = SubnetSpec(name='database', cidr_block='10.2.2.0/24')
  instance_ip: str = '10.2.2.41'
  instance_type: str = 't2.micro'
  instance_name: str = 'db'
  security_group_name: str = 'database-sg'
  database_port: int = 3306

@dataclass(frozen=True)
class TransitVpcConfig:
  vpc_name: str = 'transit-vpc'
  cidr_block: str = '10.3.0.0/16'
  subnet: SubnetSpec = SubnetSpec(name='transit', cidr_block='10.3.0.0/24')
  router_ip: str = '10.3.0.10'
  # The router AMI does not support t2.micro
  router_instance_type: str = 't2.medium'
  router_name: str = 'transit-csr'
  router_ami_name: str = 'Cisco Cloud Services Router (CSR) 1000V - BYOL for Maximum Performance'
  router_ami_id: Optional[str] = None
  router_bgp_asn: int = 65010

@dataclass(frozen=True)
class CustomerGatewaySpec:
  name: str
  ip_address: str
  bgp_asn: int

DEFAULT_SITES = (
  CustomerGatewaySpec(name='chs-r1', ip_address='24.96.154.173', bgp_asn=65000),
  CustomerGatewaySpec(name='atl-r1', ip_address='24.96.154.174', bgp_asn=65001),
)

def to_bool(value:Any)->bool:
  """
  Context values arrive as strings when passed on the command line.
  """
  if isinstance(value, bool):
    return value
  if isinstance(value, int):
    return value != 0
  text = str(value).strip().lower()
  if text in ('1', 'true', 'yes', 'on'):
    return True
  if text in ('0', 'false', 'no', 'off', ''):
    return False
  raise ConfigurationError('Expected a boolean, got {!r}'.format(value))

def to_int(value:Any, name:str)->int:
  try:
    return int(value)
  except (TypeError, ValueError) as error:
    raise ConfigurationError('Expected an integer for {}, got {!r}'.format(name, value)) from error

def parse_network(cidr:str, name:str)->IPv4Network:
  try:
    network = ip_network(cidr, strict=True)
  except ValueError as error:
    raise ConfigurationError('{} has an invalid CIDR block {!r}: {}'.format(name, cidr, error)) from error
  if not isinstance(network, IPv4Network):
    raise ConfigurationError('{} must be an IPv4 CIDR block, got {}'.format(name, cidr))
  return network

def parse_address(value:str, name:str)->IPv4Address:
  try:
    address = ip_address(value)
  except ValueError as error:
    raise ConfigurationError('{} has an invalid IP address {!r}'.format(name, value)) from error
  if not isinstance(address, IPv4Address):
    raise ConfigurationError('{} must be an IPv4 address, got {}'.format(name, value))
  return address

def reserved_addresses(subnet:IPv4Network)->List[IPv4Address]:
  """
  AWS keeps the first four and the last address of each subnet.
  """
  first = subnet.network_address
  return [first + offset for offset in range(4)] + [subnet.broadcast_address]

@dataclass(frozen=True)
class NetworkConfig:
  region: str = 'eu-west-1'
  account: Optional[str] = None
  admin_cidr: str = '24.96.0.0/16'
  web: WebVpcConfig = WebVpcConfig()
  shared: SharedVpcConfig = SharedVpcConfig()
  transit: TransitVpcConfig = TransitVpcConfig()
  sites: Tuple[CustomerGatewaySpec, ...] = DEFAULT_SITES
  deploy_peering: bool = True
  deploy_flow_logs: bool = True
  deploy_transit: bool = False
  deploy_cloudhub: bool = False
  retain_resources: bool = False
  flow_log_retention_days: int = 30
  tags: Tuple[Tuple[str, str], ...] = (('project', 'vpc-pluralsight'),)

  @property
  def availability_zone(self)->str:
    return '{}a'.format(self.region)

  def zone_of(self, subnet:SubnetSpec)->str:
    return subnet.availability_zone or self.availability_zone

  @classmethod
  def from_context(cls, node:Node)->'NetworkConfig':
    """
    Overlay the CDK context on top of the defaults.
    """
    config = cls()
    changes = {}

    for key in ('region', 'account', 'admin_cidr'):
      value = node.try_get_context(key)
      if value is not None:
        changes[key] = str(value)

    for key in ('deploy_peering', 'deploy_flow_logs', 'deploy_transit', 'deploy_cloudhub', 'retain_resources'):
      value = node.try_get_context(key)
      if value is not None:
        changes[key] = to_bool(value)

    value = node.try_get_context('flow_log_retention_days')
    if value is not None:
      changes['flow_log_retention_days'] = to_int(value, 'flow_log_retention_days')

    transit = {}
    for key in ('router_ami_id', 'router_instance_type'):
      value = node.try_get_context(key)
      if value is not None:
        transit[key] = str(value)
    if len(transit) > 0:
      changes['transit'] = replace(config.transit, **transit)

    value = node.try_get_context('availability_zone')
    if value is not None:
      changes['web'] = replace(config.web, subnet=replace(config.web.subnet, availability_zone=str(value)))
      changes['shared'] = replace(config.shared, subnet=replace(config.shared.subnet, availability_zone=str(value)))
      changes['transit'] = replace(changes.get('transit', config.transit),
        subnet=replace(config.transit.subnet, availability_zone=str(value)))

    if len(changes) > 0:
      logger.info('Context overrides: %s', ', '.join(sorted(changes)))
    return replace(config, **changes)

  def validate(self)->'NetworkConfig':
    """
    Check the addressing plan before any resource is declared.
    """
    admin = parse_network(self.admin_cidr, 'admin_cidr')
    if admin.is_private:
      logger.warning('admin_cidr %s is a private range; SSH from the internet will be refused', admin)

    web = self.__check_vpc('web', self.web.cidr_block, self.web.subnet, self.web.instance_ip)
    shared = self.__check_vpc('shared', self.shared.cidr_block, self.shared.subnet, self.shared.instance_ip)

    if not 0 < self.shared.database_port < 65536:
      raise ConfigurationError('shared.database_port {} is not a TCP port'.format(self.shared.database_port))

    if self.deploy_peering and web.overlaps(shared):
      raise ConfigurationError('web {} and shared {} overlap and can not be peered'.format(web, shared))

    if self.deploy_cloudhub and not self.deploy_transit:
      raise ConfigurationError('deploy_cloudhub requires deploy_transit')

    if self.deploy_transit:
      transit = self.__check_vpc('transit', self.transit.cidr_block, self.transit.subnet, self.transit.router_ip)
      if transit.overlaps(shared):
        raise ConfigurationError('transit {} and shared {} overlap and can not be routed over VPN'.format(transit, shared))
      self.__check_asn('transit.router_bgp_asn', self.transit.router_bgp_asn)
      if self.transit.router_ami_id is None and self.account is None:
        raise ConfigurationError('Looking up the router image needs an account; set account or router_ami_id')

    if self.deploy_cloudhub:
      if len(self.sites) == 0:
        raise ConfigurationError('deploy_cloudhub requires at least one on-prem site')
      names = [site.name for site in self.sites]
      if len(set(names)) != len(names):
        raise ConfigurationError('On-prem site names must be unique: {}'.format(names))
      for site in self.sites:
        address = parse_address(site.ip_address, 'site {}'.format(site.name))
        if not address.is_global:
          raise ConfigurationError('site {} needs a public IP, got {}'.format(site.name, address))
        self.__check_asn('site {}'.format(site.name), site.bgp_asn)

    if self.flow_log_retention_days <= 0:
      raise ConfigurationError('flow_log_retention_days must be positive')

    return self

  def __check_vpc(self, name:str, cidr:str, subnet:SubnetSpec, instance_ip:str)->IPv4Network:
    vpc = parse_network(cidr, '{}.cidr_block'.format(name))
    if not 16 <= vpc.prefixlen <= 28:
      raise ConfigurationError('{}.cidr_block {} must be between /16 and /28'.format(name, vpc))

    net = parse_network(subnet.cidr_block, '{}.subnet'.format(name))
    if not net.subnet_of(vpc):
      raise ConfigurationError('{} subnet {} is outside of vpc {}'.format(name, net, vpc))

    address = parse_address(instance_ip, '{}.instance_ip'.format(name))
    if address not in net:
      raise ConfigurationError('{} instance ip {} is outside of subnet {}'.format(name, address, net))
    if address in reserved_addresses(net):
      raise ConfigurationError('{} instance ip {} is reserved by AWS in {}'.format(name, address, net))

    zone = self.zone_of(subnet)
    if not zone.startswith(self.region):
      raise ConfigurationError('{} subnet zone {} is not in region {}'.format(name, zone, self.region))
    return vpc

  def __check_asn(self, name:str, asn:int)->None:
    if asn not in PRIVATE_ASN_RANGE:
      raise ConfigurationError('{} asn {} is outside the private range {}-{}'.format(
        name, asn, PRIVATE_ASN_RANGE.start, PRIVATE_ASN_RANGE.stop - 1))
