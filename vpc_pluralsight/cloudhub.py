from typing import List, Sequence
from constructs import Construct
from aws_cdk import (
    Tags,
    aws_ec2 as ec2,
)
from vpc_pluralsight.config import CustomerGatewaySpec
from vpc_pluralsight.interfaces import INetworkZone
from vpc_pluralsight.vpn import CustomerGateway, VirtualPrivateGateway

class CloudHub(Construct):
  """
  Hub-and-spoke VPN between the on-prem sites and the transit VPC.
  The sites talk to each other through the shared virtual private gateway.
  """
  def __init__(self, scope:Construct, id:str, transit:INetworkZone, sites:Sequence[CustomerGatewaySpec], **kwargs)->None:
    super().__init__(scope, id, **kwargs)
    Tags.of(self).add('course-module','cloudhub')

    self.gateway = VirtualPrivateGateway(self,'Hub',
      zone=transit,
      name='cloudhub-vgw')

    self.customer_gateways:List[CustomerGateway] = []
    for site in sites:
      customer_gateway = CustomerGateway(self,'Site-'+site.name,
        name=site.name,
        ip_address=site.ip_address,
        bgp_asn=site.bgp_asn)
      self.customer_gateways.append(customer_gateway)
      self.gateway.connect('Vpn-'+site.name, customer_gateway)

  @property
  def vpn_connections(self)->List[ec2.CfnVPNConnection]:
    return list(self.gateway.connections)
