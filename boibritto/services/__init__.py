"""
Domain rules invoked by the routers before persistence.
"""
