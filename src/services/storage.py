"""
Persistence service for profiles, symptom logs and saved reports.

Every record of a user lives under the user's partition of the single
DynamoDB table, so deleting an account means querying that partition.

Typical usage:
    logs = SymptomLogRepository()
    created = logs.create(user_id, SymptomLog(**payload))
    recent = logs.list_recent(user_id, limit=7)
"""
import json
import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError
from aws_lambda_powertools import Logger
from src.models.base import utc_now
from src.models.symptom_log import SymptomLog, SymptomLogUpdate
from src.models.user import UserProfile, ProfileUpdate, OnboardingData
from src.models.report import HealthReportData, SavedReport
from src.services.exceptions import StorageError, ProfileNotFoundError, LogNotFoundError
from src.utils.dynamo import (
    DynamoDBClient,
    get_dynamo,
    from_dynamo_item,
    create_pk,
    create_profile_sk,
    create_log_sk,
    create_report_sk,
    log_range_condition
)

logger = Logger()

AWS_ERRORS = (ClientError, BotoCoreError)

def _log_storage_error(message: str, user_id: str, error: Exception) -> None:
    logger.error(message, extra={
        "user_id": user_id,
        "error": str(error),
        "error_type": error.__class__.__name__
    })

class ProfileRepository:
    """Reads and writes user profiles."""

    def __init__(self, dynamo: Optional[DynamoDBClient] = None):
        self.dynamo = dynamo or get_dynamo()

    def _key(self, user_id: str) -> Dict[str, str]:
        return {"PK": create_pk(user_id), "SK": create_profile_sk()}

    def get(self, user_id: str) -> Optional[UserProfile]:
        """
        Load a user's profile.

        Returns:
            The profile, or None when the user has none yet

        Raises:
            StorageError: If the table cannot be read
        """
        try:
            item = self.dynamo.get_item(self._key(user_id))
        except AWS_ERRORS as e:
            _log_storage_error("Error loading profile", user_id, e)
            raise StorageError(f"Failed to load profile: {str(e)}") from e
        return UserProfile.model_validate(from_dynamo_item(item)) if item else None

    def save(self, profile: UserProfile) -> UserProfile:
        """Store the whole profile, replacing any previous version."""
        try:
            self.dynamo.put_item({
                **self._key(profile.uid),
                **profile.model_dump(mode="json")
            })
        except AWS_ERRORS as e:
            _log_storage_error("Error saving profile", profile.uid, e)
            raise StorageError(f"Failed to save profile: {str(e)}") from e
        return profile

    def get_or_create(self, user_id: str, email: Optional[str] = None) -> UserProfile:
        """Load the profile, creating a default one on first sign-in."""
        profile = self.get(user_id)
        if profile is not None:
            return profile

        profile = UserProfile(uid=user_id, email=email, created_at=utc_now())
        logger.info("Creating default profile", extra={"user_id": user_id})
        return self.save(profile)

    def update(self, user_id: str, changes: Dict[str, Any]) -> UserProfile:
        """
        Apply a partial update to an existing profile.

        Args:
            user_id: Owner of the profile
            changes: Attribute name to new value, snake_case

        Returns:
            The updated profile

        Raises:
            ProfileNotFoundError: If the user has no profile
            StorageError: If the table cannot be written
        """
        profile = self.get(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        if not changes:
            return profile

        names = {f"#{field}": field for field in changes}
        values = {f":{field}": value for field, value in changes.items()}
        expression = "SET " + ", ".join(f"#{field} = :{field}" for field in changes)
        try:
            response = self.dynamo.update_item(self._key(user_id), expression, values, names)
        except AWS_ERRORS as e:
            _log_storage_error("Error updating profile", user_id, e)
            raise StorageError(f"Failed to update profile: {str(e)}") from e

        logger.info("Updated profile", extra={"user_id": user_id, "fields": sorted(changes)})
        return UserProfile.model_validate(from_dynamo_item(response["Attributes"]))

    def apply_settings(self, user_id: str, update: ProfileUpdate) -> UserProfile:
        """Apply the fields the settings form actually sent."""
        return self.update(user_id, update.model_dump(mode="json", exclude_unset=True))

    def complete_onboarding(self, user_id: str, data: OnboardingData, email: Optional[str] = None) -> UserProfile:
        """Store onboarding answers and mark onboarding as complete."""
        self.get_or_create(user_id, email)
        return self.update(user_id, {
            "age_range": data.age_range.value,
            "conditions": data.conditions,
            "language": data.language.value,
            "onboarding_complete": True
        })

    def delete(self, user_id: str) -> None:
        try:
            self.dynamo.delete_item(self._key(user_id))
        except AWS_ERRORS as e:
            _log_storage_error("Error deleting profile", user_id, e)
            raise StorageError(f"Failed to delete profile: {str(e)}") from e

class SymptomLogRepository:
    """Reads and writes daily symptom logs."""

    def __init__(self, dynamo: Optional[DynamoDBClient] = None):
        self.dynamo = dynamo or get_dynamo()

    def create(self, user_id: str, log: SymptomLog) -> SymptomLog:
        """
        Store a new symptom log.

        The log gets a fresh id, the owner's id and a creation timestamp;
        values already set on ``log`` for these fields are replaced.

        Returns:
            The stored log
        """
        stored = log.model_copy(update={
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "created_at": utc_now(),
            "updated_at": None
        })
        try:
            self.dynamo.put_item({
                "PK": create_pk(user_id),
                "SK": create_log_sk(stored.date.isoformat(), stored.id),
                **stored.model_dump(mode="json")
            })
        except AWS_ERRORS as e:
            _log_storage_error("Error saving symptom log", user_id, e)
            raise StorageError(f"Failed to save symptom log: {str(e)}") from e

        logger.info("Stored symptom log", extra={
            "user_id": user_id,
            "log_id": stored.id,
            "log_date": stored.date.isoformat()
        })
        return stored

    def _query(self, user_id: str, condition: Key, limit: Optional[int] = None) -> List[SymptomLog]:
        try:
            items = self.dynamo.query_items(
                "PK",
                create_pk(user_id),
                sort_key_condition=condition,
                scan_forward=False,
                limit=limit
            )
        except AWS_ERRORS as e:
            _log_storage_error("Error loading symptom logs", user_id, e)
            raise StorageError(f"Failed to load symptom logs: {str(e)}") from e
        return [SymptomLog.model_validate(from_dynamo_item(item)) for item in items]

    def list_recent(self, user_id: str, limit: int = 30) -> List[SymptomLog]:
        """Most recent logs, newest first."""
        return self._query(user_id, log_range_condition(), limit)

    def list_range(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[SymptomLog]:
        """
        Logs between two dates, inclusive, newest first.

        Either bound may be omitted.
        """
        return self._query(user_id, log_range_condition(
            start_date.isoformat() if start_date else None,
            end_date.isoformat() if end_date else None
        ))

    def list_all(self, user_id: str) -> List[SymptomLog]:
        return self._query(user_id, log_range_condition())

    def _find_item(self, user_id: str, log_id: str) -> Optional[Dict[str, Any]]:
        """
        Raw item of a log, looked up by id.

        The sort key starts with the log date, so the id is matched against
        the end of the key.
        """
        try:
            items = self.dynamo.query_items(
                "PK",
                create_pk(user_id),
                sort_key_condition=log_range_condition()
            )
        except AWS_ERRORS as e:
            _log_storage_error("Error loading symptom log", user_id, e)
            raise StorageError(f"Failed to load symptom log: {str(e)}") from e
        suffix = f"#{log_id}"
        return next((item for item in items if item["SK"].endswith(suffix)), None)

    def get(self, user_id: str, log_id: str) -> Optional[SymptomLog]:
        item = self._find_item(user_id, log_id)
        return SymptomLog.model_validate(from_dynamo_item(item)) if item else None

    def update(self, user_id: str, log_id: str, update: SymptomLogUpdate) -> SymptomLog:
        """
        Apply an edit to an existing log and stamp ``updated_at``.

        Only the fields that were sent are changed. A new date moves the log
        to the sort key of that date.

        Args:
            user_id: Owner of the log
            log_id: Id assigned when the log was created
            update: Fields to change

        Returns:
            The updated log

        Raises:
            LogNotFoundError: If the user has no log with this id
            ValidationError: If the edited log is not a valid log
            StorageError: If the table cannot be read or written
        """
        item = self._find_item(user_id, log_id)
        if item is None:
            raise LogNotFoundError(f"No symptom log {log_id} for user {user_id}")

        current = SymptomLog.model_validate(from_dynamo_item(item))
        changes = update.model_dump(exclude_unset=True)
        updated = SymptomLog.model_validate({
            **current.model_dump(),
            **changes,
            "id": current.id,
            "user_id": user_id,
            "created_at": current.created_at,
            "updated_at": utc_now()
        })

        sort_key = create_log_sk(updated.date.isoformat(), log_id)
        try:
            self.dynamo.put_item({
                "PK": create_pk(user_id),
                "SK": sort_key,
                **updated.model_dump(mode="json")
            })
            if item["SK"] != sort_key:
                self.dynamo.delete_item({"PK": item["PK"], "SK": item["SK"]})
        except AWS_ERRORS as e:
            _log_storage_error("Error updating symptom log", user_id, e)
            raise StorageError(f"Failed to update symptom log: {str(e)}") from e

        logger.info("Updated symptom log", extra={
            "user_id": user_id,
            "log_id": log_id,
            "fields": sorted(changes)
        })
        return updated

    def delete_all(self, user_id: str) -> int:
        """
        Delete every log of a user.

        Returns:
            Number of deleted logs
        """
        return _delete_partition_items(self.dynamo, user_id, "LOG#")

class ReportRepository:
    """Stores generated health reports for the report history page."""

    def __init__(self, dynamo: Optional[DynamoDBClient] = None):
        self.dynamo = dynamo or get_dynamo()

    def save(self, user_id: str, report: HealthReportData) -> SavedReport:
        """
        Store a generated report.

        The full report is kept as a JSON string next to the summary fields
        listed in the report history.
        """
        saved = SavedReport(
            report_id=str(uuid.uuid4()),
            generated_at=report.generated_at or utc_now().isoformat(),
            period_start=report.period_start,
            period_end=report.period_end,
            executive_summary=report.executive_summary,
            total_logs_analyzed=report.total_logs_analyzed,
            risk_assessment=[item.model_dump(mode="json", by_alias=True) for item in report.risk_assessment]
        )
        try:
            self.dynamo.put_item({
                "PK": create_pk(user_id),
                "SK": create_report_sk(saved.generated_at, saved.report_id),
                **saved.model_dump(mode="json"),
                "report_json": json.dumps(report.to_response())
            })
        except AWS_ERRORS as e:
            _log_storage_error("Error saving health report", user_id, e)
            raise StorageError(f"Failed to save health report: {str(e)}") from e

        logger.info("Saved health report", extra={"user_id": user_id, "report_id": saved.report_id})
        return saved

    def list_saved(self, user_id: str, limit: Optional[int] = None) -> List[SavedReport]:
        """Saved reports, newest first."""
        try:
            items = self.dynamo.query_items(
                "PK",
                create_pk(user_id),
                sort_key_condition=Key("SK").begins_with("REPORT#"),
                scan_forward=False,
                limit=limit
            )
        except AWS_ERRORS as e:
            _log_storage_error("Error loading health reports", user_id, e)
            raise StorageError(f"Failed to load health reports: {str(e)}") from e
        return [SavedReport.model_validate(from_dynamo_item(item)) for item in items]

    def get(self, user_id: str, report_id: str) -> Optional[HealthReportData]:
        """
        Load the full stored report.

        Returns:
            The report as it was generated, or None when the user has no
            report with this id
        """
        try:
            items = self.dynamo.query_items(
                "PK",
                create_pk(user_id),
                sort_key_condition=Key("SK").begins_with("REPORT#")
            )
        except AWS_ERRORS as e:
            _log_storage_error("Error loading health report", user_id, e)
            raise StorageError(f"Failed to load health report: {str(e)}") from e

        suffix = f"#{report_id}"
        item = next((item for item in items if item["SK"].endswith(suffix)), None)
        if item is None:
            return None
        return HealthReportData.model_validate(json.loads(item["report_json"]))

    def delete_all(self, user_id: str) -> int:
        return _delete_partition_items(self.dynamo, user_id, "REPORT#")

def _delete_partition_items(dynamo: DynamoDBClient, user_id: str, prefix: str) -> int:
    """Delete every item of a user whose sort key starts with ``prefix``."""
    try:
        items = dynamo.query_items(
            "PK",
            create_pk(user_id),
            sort_key_condition=Key("SK").begins_with(prefix)
        )
        for item in items:
            dynamo.delete_item({"PK": item["PK"], "SK": item["SK"]})
    except AWS_ERRORS as e:
        _log_storage_error("Error deleting user records", user_id, e)
        raise StorageError(f"Failed to delete {prefix.rstrip('#').lower()} records: {str(e)}") from e

    logger.info("Deleted user records", extra={
        "user_id": user_id,
        "record_type": prefix.rstrip("#"),
        "count": len(items)
    })
    return len(items)
