# __init__.py - indicates that this directory is a Python package
#
# Copyright (C) 2002-2013 Python Software Foundation; All Rights Reserved
# Copyright 2014 Jeffrey Finkelstein.
#
# This file is part of osbclassifier, which is licensed under the Python
# Software Foundation License; for more information, see LICENSE.txt.
from .basic import Classifier
from .basic import ClassifierConfig
from .basic import message_classified
from .basic import Token
from .basic import Weights
