"""Structured diagnostics collected during one pipeline invocation.

A Diagnostics instance is created per invocation and returned with the
pipeline result. Nothing here is shared between invocations.

"""

import collections
import logging

from deriva.core import AttrDict

logger = logging.getLogger(__name__)

# the contexts in which a reference can fail to resolve
contexts = AttrDict({
    "unknown_schema": "unknown_schema",
    "parent_data_file": "parent_data_file",
    "lineage_cycle": "lineage_cycle",
    "case_root": "case_root",
    "biospecimen_cycle": "biospecimen_cycle",
})

Diagnostic = collections.namedtuple('Diagnostic', ['context', 'missing_id', 'referrer'])

class Diagnostics (object):
    """Ordered collection of Diagnostic records.

    Each record names the context where resolution failed, the
    identifier which could not be resolved, and the identifier of the
    entity holding the broken reference (or None).
    """

    def __init__(self):
        self.records = []

    def add(self, context, missing_id, referrer=None):
        if context not in contexts.values():
            raise ValueError('Unexpected diagnostic context %r' % (context,))
        self.records.append(Diagnostic(context, missing_id, referrer))
        logger.debug('%s: unresolved %r referenced by %r' % (context, missing_id, referrer))

    def __iter__(self):
        return iter(self.records)

    def __len__(self):
        return len(self.records)

    def missing_ids(self, context=None):
        """Return missing identifiers in order of discovery.

        :param context: Restrict to records of this context (default all).
        """
        return [
            d.missing_id
            for d in self.records
            if context is None or d.context == context
        ]

    def counts(self):
        """Return {context: number of records} for contexts with records."""
        return dict(collections.Counter(d.context for d in self.records))

    def to_list(self):
        return [ d._asdict() for d in self.records ]
