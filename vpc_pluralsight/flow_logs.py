from constructs import Construct
from aws_cdk import (
    RemovalPolicy,
    aws_ec2 as ec2,
    aws_iam as iam,
    aws_logs as logs,
)
from vpc_pluralsight.interfaces import INetworkZone

# CloudWatch only accepts a fixed set of retention periods
RETENTION_BY_DAYS = {
  1: logs.RetentionDays.ONE_DAY,
  3: logs.RetentionDays.THREE_DAYS,
  5: logs.RetentionDays.FIVE_DAYS,
  7: logs.RetentionDays.ONE_WEEK,
  14: logs.RetentionDays.TWO_WEEKS,
  30: logs.RetentionDays.ONE_MONTH,
  60: logs.RetentionDays.TWO_MONTHS,
  90: logs.RetentionDays.THREE_MONTHS,
  120: logs.RetentionDays.FOUR_MONTHS,
  150: logs.RetentionDays.FIVE_MONTHS,
  180: logs.RetentionDays.SIX_MONTHS,
  365: logs.RetentionDays.ONE_YEAR,
  400: logs.RetentionDays.THIRTEEN_MONTHS,
  545: logs.RetentionDays.EIGHTEEN_MONTHS,
  731: logs.RetentionDays.TWO_YEARS,
  1096: logs.RetentionDays.THREE_YEARS,
  1827: logs.RetentionDays.FIVE_YEARS,
  2192: logs.RetentionDays.SIX_YEARS,
  2557: logs.RetentionDays.SEVEN_YEARS,
  2922: logs.RetentionDays.EIGHT_YEARS,
  3288: logs.RetentionDays.NINE_YEARS,
  3653: logs.RetentionDays.TEN_YEARS,
}

def retention_for(days:int)->logs.RetentionDays:
  """
  Round up to the closest retention period CloudWatch supports.
  """
  for limit in sorted(RETENTION_BY_DAYS):
    if days <= limit:
      return RETENTION_BY_DAYS[limit]
  return logs.RetentionDays.INFINITE

class VpcFlowLogs(Construct):
  """
  Capture the traffic of a VPC into CloudWatch Logs.
  """
  def __init__(self, scope:Construct, id:str, zone:INetworkZone, retention_days:int=30,
    traffic_type:ec2.FlowLogTrafficType=ec2.FlowLogTrafficType.ALL, **kwargs)->None:
    super().__init__(scope, id, **kwargs)

    self.log_group = logs.LogGroup(self,'LogGroup',
      log_group_name='/vpc-pluralsight/{}/flow-logs'.format(zone.zone_name.lower()),
      removal_policy=RemovalPolicy.DESTROY,
      retention=retention_for(retention_days))

    self.role = iam.Role(self,'Role',
      assumed_by=iam.ServicePrincipal('vpc-flow-logs.amazonaws.com'),
      description='Publishes {} flow logs'.format(zone.zone_name))

    self.flow_log = ec2.FlowLog(self,'FlowLog',
      resource_type=ec2.FlowLogResourceType.from_vpc(zone.vpc),
      destination=ec2.FlowLogDestination.to_cloud_watch_logs(self.log_group, self.role),
      traffic_type=traffic_type)
