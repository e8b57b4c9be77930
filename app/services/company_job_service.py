"""
Company Job Service - keeps Company.jobs consistent with Job documents.

A job only exists through its company:
- attach: the job is stamped with the company's id/name/logo, inserted,
  and its id appended to the company's `jobs` list
- detach: the id is pulled from the company's `jobs` list and the job
  document deleted

The two writes of an attach are not a MongoDB transaction. They run in a
`job_registration` unit: if registering the new ids on the company fails,
the unit hands the ids of the jobs it created to an orphaned-jobs hook and
re-raises. The default hook only records them; `delete_orphaned_jobs`
removes them instead.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional, Union

from app.core.errors import NotFoundError
from app.services.mongo_service import StoreRegistry, to_object_id

logger = logging.getLogger(__name__)

OrphanedJobsHook = Callable[[str, List[str]], None]
JobPayload = Dict[str, object]


def log_orphaned_jobs(company_id: str, job_ids: List[str]) -> None:
    """Default hook: the jobs stay in the database without a company entry."""
    logger.error(
        "Jobs %s were created but could not be registered on company %s",
        job_ids, company_id
    )


def delete_orphaned_jobs(stores: StoreRegistry) -> OrphanedJobsHook:
    """Compensating hook: delete jobs that never reached the company."""
    def compensate(company_id: str, job_ids: List[str]) -> None:
        for job_id in job_ids:
            stores.jobs.delete_by_id(job_id)
        logger.warning(
            "Deleted %d orphaned job(s) after registering them on company %s failed",
            len(job_ids), company_id
        )
    return compensate


class CompanyJobService:
    """Create and remove jobs through their owning company."""

    def __init__(self, stores: StoreRegistry, on_orphaned_jobs: Optional[OrphanedJobsHook] = None):
        self.stores = stores
        self.on_orphaned_jobs = on_orphaned_jobs or log_orphaned_jobs

    def _get_company(self, company_id: str) -> dict:
        company = self.stores.companies.get_by_id(company_id)
        if company is None:
            raise NotFoundError("Specific company was not found.")
        return company

    @contextmanager
    def job_registration(self, company_id: str):
        """
        Logical unit for "insert jobs, then register them on the company".

        Yields a list; append the ids of created jobs to it. On failure the
        hook receives every id collected so far.
        """
        created_ids: List[str] = []
        try:
            yield created_ids
        except Exception:
            if created_ids:
                self.on_orphaned_jobs(company_id, list(created_ids))
            raise

    def attach_jobs(
        self, company_id: str, job_data: Union[JobPayload, List[JobPayload]]
    ) -> Union[dict, List[dict]]:
        """
        Create one job or a batch of jobs for a company.

        Args:
            company_id: Id of the owning company
            job_data: A single job payload or a list of payloads

        Returns:
            The created job for a single payload, the created jobs (in
            input order) for a list

        Raises:
            NotFoundError: company does not exist
        """
        company = self._get_company(company_id)

        def prepare(data: JobPayload) -> dict:
            return {
                **data,
                "company_name": company["name"],
                "companyId": to_object_id(company["_id"]),
                "company_image": company.get("logo") or "",
            }

        is_batch = isinstance(job_data, list)
        payloads = job_data if is_batch else [job_data]
        if not payloads:
            return []

        with self.job_registration(company["_id"]) as created_ids:
            if is_batch:
                new_jobs = self.stores.jobs.insert_many([prepare(data) for data in payloads])
            else:
                new_jobs = [self.stores.jobs.insert(prepare(job_data))]
            created_ids.extend(job["_id"] for job in new_jobs)

            if not self.stores.companies.push_jobs(company["_id"], created_ids):
                raise NotFoundError("Specific company was not found.")

        logger.info("Attached %d job(s) to company %s", len(new_jobs), company["_id"])
        return new_jobs if is_batch else new_jobs[0]

    def detach_job(self, company_id: str, job_id: str) -> None:
        """
        Remove a job from a company and delete it.

        Succeeds whether or not the job document exists.

        Raises:
            NotFoundError: company does not exist
        """
        company = self._get_company(company_id)

        job = self.stores.jobs.get_by_id(job_id)
        if job is None:
            logger.debug("Job %s not found while detaching it from company %s", job_id, company["_id"])

        self.stores.companies.pull_job(company["_id"], job_id)
        self.stores.jobs.delete_by_id(job_id)
        logger.info("Detached job %s from company %s", job_id, company["_id"])
