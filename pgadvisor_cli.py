"""
---------------------------------------------------------------------------
This script runs the PostgreSQL settings advisor from the command line on a
sample machine and prints the recommended postgresql.conf content. Edit the
options below to describe your own server.

"""
from pgadvisor import advisor
from pgadvisor.tuner.data.options import PG_TUNE_USR_OPTIONS
from pgadvisor.tuner.data.workload import PG_WORKLOAD, PG_OS, PG_STORAGE, PG_BACKUP_TOOL
from pgadvisor.tuner.pg_dataclass import PG_TUNE_REQUEST


if __name__ == "__main__":
    options = PG_TUNE_USR_OPTIONS(
        version=17, os=PG_OS.LINUX,
        memory_gb=16, cpus=8,                     # The machine
        storage_type=PG_STORAGE.SSD, num_disks=2,  # The storage backing the data directory
        workload=PG_WORKLOAD.OLTP,
        max_conn=None,                            # Let the advisor derive it from the workload
        backup_method=PG_BACKUP_TOOL.PG_BASEBACKUP,
        num_replicas=1, db_size_gb=250,
    )
    rq = PG_TUNE_REQUEST(options=options, output_format='conf')
    response = advisor.optimize(rq)
    print(response.generate_content(output_format=rq.output_format))
