"""
Multicast Adapters.
Framework glue over multicast.delegates. Import submodules directly.
"""
