# __init__.py - indicates that this directory is a Python package
#
# Copyright (C) 2002-2013 Python Software Foundation; All Rights Reserved
# Copyright 2014 Jeffrey Finkelstein.
#
# This file is part of osbclassifier, which is licensed under the Python
# Software Foundation License; for more information, see LICENSE.txt.
from .classifiers import Classifier
from .classifiers import ClassifierConfig
from .classifiers import message_classified
from .classifiers import Token
from .classifiers import Weights
