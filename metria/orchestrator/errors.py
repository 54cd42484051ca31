from metria.errors import MetriaError


class ReportNotFoundError(MetriaError):
    def __init__(self, report_id: str):
        super().__init__(f"Report '{report_id}' not found.")
        self.report_id = report_id


class CompanyNotFoundError(MetriaError):
    def __init__(self, company_id: str):
        super().__init__(f"Company '{company_id}' not found.")
        self.company_id = company_id


class CompanyInUseError(MetriaError):
    def __init__(self, company_id: str, user_count: int):
        super().__init__("A company with active users cannot be deleted.")
        self.company_id = company_id
        self.user_count = user_count
