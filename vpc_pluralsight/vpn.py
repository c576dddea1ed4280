from typing import List
from constructs import Construct
from aws_cdk import (
    CfnTag,
    aws_ec2 as ec2,
)
from vpc_pluralsight.interfaces import INetworkZone

IPSEC = 'ipsec.1'

class CustomerGateway(ec2.CfnCustomerGateway):
  """
  The AWS side description of a router outside of the VPC.
  """
  def __init__(self, scope:Construct, id:str, name:str, ip_address:str, bgp_asn:int)->None:
    super().__init__(scope, id,
      ip_address=ip_address,
      bgp_asn=bgp_asn,
      type=IPSEC,
      tags=[CfnTag(key='Name',value=name)])
    self.gateway_name = name

class VirtualPrivateGateway(Construct):
  """
  A VGW attached to a zone with its routes propagated into the zone route tables.
  """
  def __init__(self, scope:Construct, id:str, zone:INetworkZone, name:str, amazon_side_asn:int=64512, **kwargs)->None:
    super().__init__(scope, id, **kwargs)
    self.zone = zone
    self.connections:List[ec2.CfnVPNConnection] = []

    self.gateway = ec2.CfnVPNGateway(self,'VpnGateway',
      amazon_side_asn=amazon_side_asn,
      type=IPSEC,
      tags=[CfnTag(key='Name',value=name)])

    self.attachment = ec2.CfnVPCGatewayAttachment(self,'Attachment',
      vpc_id=zone.vpc.vpc_id,
      vpn_gateway_id=self.gateway.ref)

    routes = ec2.CfnVPNGatewayRoutePropagation(self,'RoutePropagation',
      route_table_ids=[table.attr_route_table_id for table in zone.route_tables],
      vpn_gateway_id=self.gateway.ref)

    routes.add_resource_dependency(self.attachment)

  @property
  def gateway_id(self)->str:
    return self.gateway.ref

  def connect(self, id:str, customer_gateway:CustomerGateway, static_routes_only:bool=False)->ec2.CfnVPNConnection:
    """
    Create the site-to-site connection towards a customer gateway.
    The tunnel configuration still has to be downloaded and applied on the router by hand.
    """
    connection = ec2.CfnVPNConnection(self,id,
      customer_gateway_id=customer_gateway.ref,
      vpn_gateway_id=self.gateway.ref,
      static_routes_only=static_routes_only,
      type=IPSEC,
      tags=[CfnTag(key='Name',value=customer_gateway.gateway_name)])

    connection.add_resource_dependency(self.attachment)
    self.connections.append(connection)
    return connection
