"""
Example: Querying SpaceGDN with the fluent QueryBuilder.

Set SPACEGDN_ENDPOINT (or pass an endpoint) before running.
"""

import json

from spacegdn_sdk import QueryBuilder, SortOrder, SpaceGDNClient, SpaceGDNError

ENDPOINT = "gdn.api.xereo.net"


def example_list_jars():
    """Example 1: List every jar."""
    print("Example 1: List Jars")
    print("-" * 50)

    with SpaceGDNClient(ENDPOINT) as gdn:
        jars = gdn.jars()
        print(f"✓ Found {len(jars)} jars (page 1 of {jars.pages})")
        for jar in jars:
            print(f"  {jar['id']}: {jar['name']} ({jar['site_url']})")


def example_nested_query():
    """Example 2: Builds of one jar, newest first, third page."""
    print("\nExample 2: Nested Query")
    print("-" * 50)

    builds = (
        QueryBuilder(endpoint=ENDPOINT)
        .select_jar(2)
        .get("builds")
        .where("build", ">", 1234)
        .order_by("build", SortOrder.Descending)
        .page(3)
    )
    print(f"Requesting {builds.build_url()}")
    latest = builds.record_at(0)
    if latest:
        print(f"✓ Latest build {latest['build']}: {latest['url']} (sha {latest['checksum']})")
    else:
        print("  No builds on this page")


def example_membership_filter():
    """Example 3: Several versions by id, dumped as JSON."""
    print("\nExample 3: Membership Filter")
    print("-" * 50)

    with SpaceGDNClient(ENDPOINT) as gdn:
        versions = gdn.query().get("versions").where("version.id", "in", [1, 2, 3])
        print(json.dumps(json.loads(str(versions)), indent=2))


if __name__ == "__main__":
    print("=" * 50)
    print("SpaceGDN Query Examples")
    print("=" * 50)

    try:
        example_list_jars()
        # example_nested_query()
        # example_membership_filter()
    except SpaceGDNError as e:
        print(f"✗ Error: {e}")
