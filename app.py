#!/usr/bin/env python3
import logging
from os import environ
from aws_cdk import App, Environment
from vpc_pluralsight.aspects import add_aspects
from vpc_pluralsight.config import NetworkConfig
from vpc_pluralsight.stack import VpcPluralsightStack

def log_level(value:str)->str:
  """
  Accept LOG_LEVEL=debug as well as LOG_LEVEL=DEBUG.
  """
  return value.strip().upper()

logging.basicConfig(level=log_level(environ.get('LOG_LEVEL', 'INFO')))
logger = logging.getLogger()

class VpcPluralsightApp(App):
  def __init__(self, **kwargs) ->None:
    super().__init__(**kwargs)

    self.config = NetworkConfig.from_context(self.node)
    logger.info('Synthesizing for region=%s account=%s', self.config.region, self.config.account or '<cli default>')

    self.network = VpcPluralsightStack(self,'VpcPluralsightStack',
      config=self.config,
      env=Environment(
        account=self.config.account,
        region=self.config.region))

    add_aspects(self, self.config)

if __name__ == '__main__':
  app = VpcPluralsightApp()
  app.synth()
