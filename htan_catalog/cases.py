"""Join files to biospecimens and biospecimens to participant cases.

A file's biospecimens are named by its primary parents (or by the
file itself when it has none).  Each biospecimen names a parent which
is either another biospecimen or a participant, so the participant is
found by walking up the biospecimen chain until the identifier is no
longer a known biospecimen.  Cases are diagnosis records merged with
the demographics record of the same participant.

"""

import logging

from .diagnostics import contexts
from .entity import components

logger = logging.getLogger(__name__)

class EntityIndex (object):
    """Biospecimen, diagnosis and demographics indices over a flat entity list.

    The last entity wins when identifiers repeat.
    """

    def __init__(self, entities):
        self.biospecimen_by_id = {}
        self.diagnosis_by_participant_id = {}
        self.demographics_by_participant_id = {}
        for entity in entities:
            component = entity.component
            if component == components.biospecimen:
                self.biospecimen_by_id[entity.biospecimen_id] = entity
            elif component == components.diagnosis:
                self.diagnosis_by_participant_id[entity.participant_id] = entity
            elif component == components.demographics:
                self.demographics_by_participant_id[entity.participant_id] = entity
        logger.debug('Indexed %d biospecimens, %d diagnoses, %d demographics' % (
            len(self.biospecimen_by_id),
            len(self.diagnosis_by_participant_id),
            len(self.demographics_by_participant_id),
        ))

class CaseData (object):
    """Joined sample and patient data for one file."""

    def __init__(self, biospecimen, diagnosis, demographics, cases):
        self.biospecimen = biospecimen
        self.diagnosis = diagnosis
        self.demographics = demographics
        self.cases = cases

class CaseJoiner (object):
    """Resolve biospecimen and case data for files.

    :param index: An EntityIndex over the flat entity list.
    :param diagnostics: A Diagnostics instance for missing case roots and cycles.
    """

    def __init__(self, index, diagnostics):
        self.index = index
        self.diagnostics = diagnostics

    def file_biospecimens(self, f, primary_parents):
        """Return biospecimens named by the file's ancestors, deduplicated by id."""
        ancestors = primary_parents if primary_parents else [f]
        found = {}
        for ancestor in ancestors:
            for biospecimen_id in ancestor.parent_biospecimen_ids:
                biospecimen = self.index.biospecimen_by_id.get(biospecimen_id)
                if biospecimen is not None:
                    found.setdefault(biospecimen_id, biospecimen)
        return list(found.values())

    def participant_id(self, biospecimen):
        """Return the participant id at the root of a biospecimen's parent chain.

        Returns None if the chain loops back on itself.
        """
        seen = {biospecimen.biospecimen_id}
        parent_id = biospecimen.parent_id
        while parent_id is not None and parent_id in self.index.biospecimen_by_id:
            if parent_id in seen:
                self.diagnostics.add(contexts.biospecimen_cycle, parent_id, biospecimen.biospecimen_id)
                return None
            seen.add(parent_id)
            parent_id = self.index.biospecimen_by_id[parent_id].parent_id
        return parent_id

    def _case_records(self, roots, records_by_participant_id, report_missing):
        records = []
        for biospecimen, participant_id in roots:
            record = None if participant_id is None else records_by_participant_id.get(participant_id)
            if record is None:
                if report_missing:
                    logger.warning('%s does not have a HTANParentID with diagnosis information' % (biospecimen.biospecimen_id,))
                    self.diagnostics.add(contexts.case_root, participant_id, biospecimen.biospecimen_id)
                continue
            records.append(record)
        return records

    def merge_cases(self, diagnosis):
        """Return case entities merging each diagnosis with its participant's demographics.

        Demographics fields win over diagnosis fields of the same name.
        """
        return [
            d.merged(self.index.demographics_by_participant_id.get(d.participant_id))
            for d in diagnosis
        ]

    def join(self, f, primary_parents):
        """Return CaseData for a file given its primary parents."""
        biospecimen = self.file_biospecimens(f, primary_parents)
        roots = [ (b, self.participant_id(b)) for b in biospecimen ]
        diagnosis = self._case_records(roots, self.index.diagnosis_by_participant_id, True)
        demographics = self._case_records(roots, self.index.demographics_by_participant_id, False)
        cases = self.merge_cases(diagnosis)
        return CaseData(biospecimen, diagnosis, demographics, cases)
