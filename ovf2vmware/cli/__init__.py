# ovf2vmware/cli/__init__.py
