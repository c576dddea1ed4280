#!/usr/bin/env python3
from logging import getLogger
from typing import List
from constructs import Construct
from aws_cdk import (
    CfnOutput,
    Stack,
    Tags,
    aws_ec2 as ec2,
)
from vpc_pluralsight.config import NetworkConfig
from vpc_pluralsight.cloudhub import CloudHub
from vpc_pluralsight.flow_logs import VpcFlowLogs
from vpc_pluralsight.interfaces import INetworkZone
from vpc_pluralsight.peering import VpcPeering
from vpc_pluralsight.shared import SharedVpc
from vpc_pluralsight.transit import TransitVpc
from vpc_pluralsight.web import WebVpc

logger = getLogger(__name__)

class VpcPluralsightStack(Stack):
  """
  All networks of the course in one stack.
  The transit VPC and CloudHub are opt-in because they need manual router configuration.
  """
  def __init__(self, scope:Construct, id:str, config:NetworkConfig, **kwargs)->None:
    super().__init__(scope, id, **kwargs)
    self.config = config.validate()
    for key, value in config.tags:
      Tags.of(self).add(key, value)

    self.web = WebVpc(self,'Web',
      config=config.web,
      availability_zone=config.zone_of(config.web.subnet),
      admin_cidr=config.admin_cidr)

    self.shared = SharedVpc(self,'Shared',
      config=config.shared,
      availability_zone=config.zone_of(config.shared.subnet),
      peer_cidr=config.web.cidr_block)

    self.peering = None
    if config.deploy_peering:
      self.peering = VpcPeering(self,'Peering',
        owner=self.web,
        peer=self.shared)
    else:
      logger.info('Skipping web/shared peering')

    self.transit = None
    if config.deploy_transit:
      self.transit = TransitVpc(self,'Transit',
        config=config.transit,
        availability_zone=config.zone_of(config.transit.subnet),
        admin_cidr=config.admin_cidr,
        shared=self.shared,
        key_pair_name=config.web.key_pair_name)
      self.transit.node.add_dependency(self.web.key_pair)

    self.cloudhub = None
    if config.deploy_cloudhub:
      self.cloudhub = CloudHub(self,'CloudHub',
        transit=self.transit,
        sites=config.sites)

    self.flow_logs = []
    if config.deploy_flow_logs:
      for zone in self.zones:
        self.flow_logs.append(VpcFlowLogs(self,'FlowLogs'+zone.zone_name,
          zone=zone,
          retention_days=config.flow_log_retention_days))
    else:
      logger.info('Skipping flow logs')

    logger.info('Declared zones: %s', ', '.join(zone.zone_name for zone in self.zones))
    self.__add_outputs()

  @property
  def zones(self)->List[INetworkZone]:
    zones = [self.web, self.shared]
    if self.transit is not None:
      zones.append(self.transit)
    return zones

  @property
  def vpn_connections(self)->List[ec2.CfnVPNConnection]:
    connections = []
    if self.transit is not None:
      connections.extend(self.transit.vpn_connections)
    if self.cloudhub is not None:
      connections.extend(self.cloudhub.vpn_connections)
    return connections

  def __add_outputs(self)->None:
    CfnOutput(self,'WebPublicIp',
      value=self.web.public_ip,
      description='Elastic IP of the web server')

    for zone in self.zones:
      CfnOutput(self,zone.zone_name+'VpcId',
        value=zone.vpc.vpc_id,
        description='{} VPC ({})'.format(zone.zone_name, zone.cidr_block))

    if self.transit is not None:
      CfnOutput(self,'RouterPublicIp',
        value=self.transit.elastic_ip.ref,
        description='Elastic IP of the transit router')

    counter = 0
    for connection in self.vpn_connections:
      counter += 1
      CfnOutput(self,'VpnConnection{}'.format(counter),
        value=connection.ref,
        description='Download this VPN configuration and apply it on the router')
