# ABOUTME: Tag conversion helpers for Elastic Beanstalk and S3 requests
# ABOUTME: Turns plain key/value mappings into structured tag lists or tagging strings

"""Tag codec for AWS requests."""

from urllib.parse import quote

# Kept literal in tagging strings, on top of quote()'s own safe set
_UNRESERVED = "!*'()"


def to_tag_list(tags: dict[str, str]) -> list[dict[str, str]]:
    """Convert a mapping into the ``[{"Key": ..., "Value": ...}]`` tag shape."""
    return [{"Key": key, "Value": value} for key, value in tags.items()]


def to_tag_query(tags: dict[str, str]) -> str:
    """
    Format a mapping as a URL-encoded tagging string.

    Each pair is encoded and joined with ``,``, producing
    ``key1=value1,key2=value2``. Used for the ``Tagging`` field of S3 PutObject.

    See https://docs.aws.amazon.com/elasticbeanstalk/latest/dg/environment-configuration-savedconfig-tagging.html
    """
    return ",".join(f"{quote(key, safe=_UNRESERVED)}={quote(value, safe=_UNRESERVED)}" for key, value in tags.items())
