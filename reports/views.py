"""
Reports — Views

Dashboard summary and the inventory / expiry / assignments reports.
``?export=pdf`` or ``?export=xlsx`` returns the report as a download
instead of JSON.

@file reports/views.py
"""

import logging

from django.http import HttpResponse
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from assignments.serializers import AssignmentReadSerializer
from core.exceptions import ResourceNotFoundError
from core.serializers import ActivityLogSerializer
from inventory.serializers import ProductReadSerializer

from .exports import build_report_pdf, build_report_xlsx, export_filename
from .serializers import ReportFilterSerializer
from .services import ASSIGNMENTS, EXPIRY, INVENTORY, REPORT_TYPES, ReportService

logger = logging.getLogger('medstock')

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

# Filters each report accepts, beyond ``export``.
REPORT_FILTERS = {
    INVENTORY: ('category',),
    EXPIRY: ('category', 'days'),
    ASSIGNMENTS: ('start_date', 'end_date', 'category', 'client'),
}


class DashboardView(APIView):
    """GET /v1/reports/dashboard — Headline counts plus recent activity."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        data = ReportService.dashboard()
        return Response({
            'success': True,
            'data': {
                'stats': data['stats'],
                'recent_assignments': AssignmentReadSerializer(data['recent_assignments'], many=True).data,
                'recent_activities': ActivityLogSerializer(data['recent_activities'], many=True).data,
                'low_stock': ProductReadSerializer(data['low_stock'], many=True).data,
                'expiring': ProductReadSerializer(data['expiring'], many=True).data,
            },
        })


class ReportView(APIView):
    """GET /v1/reports/{inventory|expiry|assignments}"""
    permission_classes = [IsAuthenticated]

    def get(self, request, report_type):
        if report_type not in REPORT_TYPES:
            raise ResourceNotFoundError(detail=f'Unknown report: {report_type}.')

        ser = ReportFilterSerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        params = ser.validated_data
        filters = {
            name: params[name]
            for name in REPORT_FILTERS[report_type]
            if params.get(name) not in (None, '')
        }

        report = ReportService.build(report_type, **filters)
        export = params.get('export')
        if export:
            return self._export(report_type, report['rows'], export)

        row_serializer = AssignmentReadSerializer if report_type == ASSIGNMENTS else ProductReadSerializer
        return Response({
            'success': True,
            'data': {
                'report': report_type,
                'count': len(report['rows']),
                'rows': row_serializer(report['rows'], many=True).data,
                'chart': report['chart'],
            },
        })

    def _export(self, report_type, rows, export):
        today = timezone.localdate()
        if export == 'pdf':
            response = HttpResponse(build_report_pdf(report_type, rows, today), content_type='application/pdf')
        else:
            response = HttpResponse(build_report_xlsx(report_type, rows), content_type=XLSX_CONTENT_TYPE)
        filename = export_filename(report_type, export, today)
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        logger.info('Exported %s (%s) for user %s', filename, export, self.request.user.pk)
        return response
