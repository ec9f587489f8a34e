__version__ = "0.3.0"
__description__ = "webadmin : declarative JSON:API resources for Flask"
