#!/usr/bin/env python3
"""Regression case for MXS-585 "Intermittent connection failure with MaxScale 1.2/1.3 using MariaDB/J 1.3".

- open connection, execute simple query and close connection in the loop
"""
from nonnative.dispatcher import main

if __name__ == "__main__":
    main(__file__)
