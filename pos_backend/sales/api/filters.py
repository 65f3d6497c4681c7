# sales/api/filters.py

import django_filters

from sales.models import Sale


class SaleFilter(django_filters.FilterSet):
    """
    Sales history filters:
    - payment_status=fully_paid
    - is_special_invoice=true
    - q=<client name fragment>
    - date=YYYY-MM-DD (sale day)
    """

    payment_status = django_filters.ChoiceFilter(choices=Sale.STATUS_CHOICES)
    is_special_invoice = django_filters.BooleanFilter()
    q = django_filters.CharFilter(field_name="client__name", lookup_expr="icontains")
    date = django_filters.DateFilter(field_name="sold_at", lookup_expr="date")

    class Meta:
        model = Sale
        fields = ["payment_status", "is_special_invoice", "q", "date"]
