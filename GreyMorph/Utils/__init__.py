# -*- coding: utf-8 -*-
"""
Utils
=====

Utility modules: exceptions and timing.
"""
