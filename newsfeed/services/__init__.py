# newsfeed/services/__init__.py
#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Service Layer Package.

Network clients for the headlines endpoint and article thumbnails.
"""
