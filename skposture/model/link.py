class Link(object):
    """Rigid body of a kinematic tree.

    Parameters
    ----------
    name : str
        link name used to resolve bodies in contact and collision records.
    """

    def __init__(self, name=None):
        self.name = name
        self.joint = None
        self.parent_link = None
        self.child_links = []

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        if self.name:
            prefix = self.__class__.__name__ + \
                ' ' + hex(id(self)) + ' ' + self.name
        else:
            prefix = self.__class__.__name__ + ' ' + hex(id(self))
        return '#<%s>' % prefix
