from constructs import Construct
from aws_cdk import (
    CfnTag,
    aws_ec2 as ec2,
)
from vpc_pluralsight.interfaces import INetworkZone

class VpcPeering(Construct):
  """
  Establishes a same-account, same-region peering and routes both ways.
  """
  def __init__(self, scope:Construct, id:str, owner:INetworkZone, peer:INetworkZone, **kwargs)->None:
    super().__init__(scope, id, **kwargs)
    self.owner = owner
    self.peer = peer

    self.peering = ec2.CfnVPCPeeringConnection(self,'PeerConnection',
      vpc_id=owner.vpc.vpc_id,
      peer_vpc_id=peer.vpc.vpc_id,
      tags=[CfnTag(key='Name',value='{}-{}'.format(owner.zone_name, peer.zone_name).lower())])

    self.__add_routes(owner, peer.cidr_block)
    self.__add_routes(peer, owner.cidr_block)

  def __add_routes(self, zone:INetworkZone, destination:str)->None:
    counter = 0
    for route_table in zone.route_tables:
      counter += 1
      ec2.CfnRoute(self,'{}-{}'.format(zone.zone_name, counter),
        route_table_id=route_table.attr_route_table_id,
        destination_cidr_block=destination,
        vpc_peering_connection_id=self.peering.ref)
