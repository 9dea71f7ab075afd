from .enum import *
from .utils import *
