#!/usr/bin/env python3
'''
Hide messages into PNG files.

 $ pngchunks.py encode image.png ruSt 'hello world'
 $ pngchunks.py decode image.png ruSt
Decoded message: hello world
'''
import logging
import sys
import os

from pngme.commands import main


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


if __name__ == '__main__':
    sys.exit(main(sys.argv))
