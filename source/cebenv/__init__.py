# ABOUTME: cebenv - Clone and deploy AWS Elastic Beanstalk environments
# ABOUTME: Main package for the Elastic Beanstalk upload, clone and deploy helper

"""cebenv - Elastic Beanstalk configuration clone and deployment tool."""

__version__ = "1.0.0"
__all__ = ["cli", "config"]
