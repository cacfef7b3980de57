"""Kubelet scrape configuration (kubescrape).

Derive the client configuration used to scrape kubelet metrics endpoints from a
cluster connection descriptor and a set of override flags.
"""

__version__ = "0.1.0"
__author__ = "Platform Engineering Team"
__license__ = "Apache-2.0"
