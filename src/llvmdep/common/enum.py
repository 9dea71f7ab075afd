from enum import Enum, IntEnum

class Enum2(Enum):
    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()

class IntEnum2(IntEnum):
    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()
