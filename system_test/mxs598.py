#!/usr/bin/env python3
"""Regression case for MXS-598 "SSL RW Router / JDBC Exception".

- use SSL for Maxscale client connection
- simple transactions in the loop
"""
from nonnative.dispatcher import main

if __name__ == "__main__":
    main(__file__)
