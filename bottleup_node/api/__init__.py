"""HTTP routers for the BottleUp node. Mounted by bottleup_node.bottleup_api."""
