"""Resolve file lineage to primary (rootmost) parent files.

Files may declare several parent files, and branches of the lineage
graph often converge on the same root, so results are memoized per
file.  The traversal is iterative and keeps the set of files on the
current path so that a parent cycle terminates its branch instead of
recursing forever.

"""

import logging

from .diagnostics import contexts

logger = logging.getLogger(__name__)

class LineageResolver (object):
    """Memoizing primary-parent resolver over one set of file entities.

    :param files: Iterable of file entities.
    :param diagnostics: A Diagnostics instance for unresolved references and cycles.

    A file with no declared parent is its own sole primary parent.
    Otherwise its primary parents are the union of its resolvable
    parents' primary parents, deduplicated by file id in discovery
    order.  Parent ids are looked up by file id, the last file winning
    when ids repeat.

    Results are cached per file entity, not per file id, and only for
    files with declared parents.  A file whose lineage was cut short by
    a parent cycle is not cached, so its result does not depend on
    which file of the cycle was resolved first.
    """

    def __init__(self, files, diagnostics):
        self.files_by_id = { f.data_file_id: f for f in files }
        self.diagnostics = diagnostics
        # id(file) -> (file, primary parents)
        self.cache = {}

    def _parent_files(self, f):
        parents = []
        for parent_id in f.parent_data_file_ids:
            parent = self.files_by_id.get(parent_id)
            if parent is None:
                self.diagnostics.add(contexts.parent_data_file, parent_id, f.data_file_id)
            else:
                parents.append(parent)
        return parents

    def cached(self, f):
        """Return cached primary parents for f or None."""
        entry = self.cache.get(id(f))
        return entry[1] if entry is not None else None

    @staticmethod
    def _add(found, parents):
        for p in parents:
            key = p.data_file_id if p.data_file_id is not None else id(p)
            found.setdefault(key, p)

    def primary_parents(self, f):
        """Return list of primary parent file entities for f."""
        result = self.cached(f)
        if result is not None:
            return result
        if not f.parent_data_file_ids:
            return [f]

        # each frame is [file, iterator over its parent files, {id: primary parent}, cut by cycle]
        stack = [[f, iter(self._parent_files(f)), {}, False]]
        visiting = {id(f)}

        while True:
            frame = stack[-1]
            node, parents, found = frame[0], frame[1], frame[2]
            descend = None
            for parent in parents:
                parent_result = self.cached(parent)
                if parent_result is not None:
                    self._add(found, parent_result)
                elif not parent.parent_data_file_ids:
                    self._add(found, [parent])
                elif id(parent) in visiting:
                    self.diagnostics.add(contexts.lineage_cycle, parent.data_file_id, node.data_file_id)
                    frame[3] = True
                else:
                    descend = parent
                    break

            if descend is not None:
                visiting.add(id(descend))
                stack.append([descend, iter(self._parent_files(descend)), {}, False])
                continue

            stack.pop()
            visiting.discard(id(node))
            result = list(found.values())
            if not frame[3]:
                self.cache[id(node)] = (node, result)
            if not stack:
                return result
            self._add(stack[-1][2], result)
            if frame[3]:
                stack[-1][3] = True

    def resolve_all(self, files):
        """Return [(file, primary_parents), ...] for files in input order."""
        resolved = [ (f, self.primary_parents(f)) for f in files ]
        logger.debug('Resolved lineage for %d files (%d cached)' % (len(resolved), len(self.cache)))
        return resolved
