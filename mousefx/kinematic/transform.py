from mousefx.geombase import GeneralPose3


class Transform3:
    """A node of the 3D transformations tree using GeneralPose3."""

    def __init__(self, local_pose: GeneralPose3 = None, parent: 'Transform3' = None, name: str = ""):
        self._local_pose = local_pose if local_pose is not None else GeneralPose3.identity()
        self.name = name
        self.parent = None
        self.children = []
        self.entity = None
        self._global_pose = None
        self._dirty = True

        if parent:
            parent.add_child(self)

    def _unparent(self):
        if self.parent:
            self.parent.children.remove(self)
            self.parent = None

    def add_child(self, child: 'Transform3'):
        if child is self or self._has_ancestor(child):
            raise ValueError("Cycle detected in Transform hierarchy")
        child._unparent()
        self.children.append(child)
        child.parent = self
        child._mark_dirty()

    def relocate(self, pose: GeneralPose3):
        self._local_pose = pose
        self._mark_dirty()

    def _mark_dirty(self):
        self._dirty = True
        for child in self.children:
            child._mark_dirty()

    def local_pose(self) -> GeneralPose3:
        return self._local_pose

    def global_pose(self) -> GeneralPose3:
        if self._dirty:
            if self.parent:
                self._global_pose = self.parent.global_pose() * self._local_pose
            else:
                self._global_pose = self._local_pose
            self._dirty = False
        return self._global_pose

    def _has_ancestor(self, possible_ancestor):
        current = self.parent
        while current:
            if current is possible_ancestor:
                return True
            current = current.parent
        return False

    def __repr__(self):
        return f"Transform3({self.name}, local_pose={self._local_pose})"
